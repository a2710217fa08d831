"""Tests for ListSource."""

import asyncio

import pytest

from prompter.core import Prompter
from prompter.domain.protocols import MarkableSource, Source
from prompter.domain.types import OutcomeKind
from prompter.sources import ListSource, substring_matcher


def values(source):
    return [suggestion.value for suggestion in source.suggestions()]


class TestSubstringMatcher:
    def test_scores(self):
        assert substring_matcher("ap", "Apple") == 1.0
        assert substring_matcher("pp", "apple") == 0.5
        assert substring_matcher("zz", "apple") is None
        assert substring_matcher("", "apple") == 0.0


class TestListSource:
    def test_satisfies_protocols(self):
        source = ListSource("fruits", [])
        assert isinstance(source, Source)
        assert isinstance(source, MarkableSource)

    @pytest.mark.asyncio
    async def test_update_filters_ranks_and_reports(self):
        source = ListSource("fruits", ["grape", "apple", "pineapple", "apricot"])
        channel: asyncio.Queue = asyncio.Queue()
        source.update("ap", channel)

        assert await asyncio.wait_for(channel.get(), timeout=1.0) is source
        assert values(source) == ["apple", "apricot", "grape", "pineapple"]

    @pytest.mark.asyncio
    async def test_async_matcher(self):
        async def exact(input, value):
            await asyncio.sleep(0)
            return 1.0 if input == value else None

        source = ListSource("words", ["a", "b"], matcher=exact)
        channel: asyncio.Queue = asyncio.Queue()
        source.update("b", channel)

        await asyncio.wait_for(channel.get(), timeout=1.0)
        assert values(source) == ["b"]

    @pytest.mark.asyncio
    async def test_failing_matcher_still_reports(self):
        def broken(input, value):
            raise ValueError("bad matcher")

        source = ListSource("words", ["a"], matcher=broken)
        channel: asyncio.Queue = asyncio.Queue()
        source.update("a", channel)

        assert await asyncio.wait_for(channel.get(), timeout=1.0) is source
        assert values(source) == []

    @pytest.mark.asyncio
    async def test_superseded_update_is_discarded(self):
        release = asyncio.Event()

        async def gated(input, value):
            if input == "slow":
                await release.wait()
            return 1.0

        source = ListSource("words", ["w"], matcher=gated)
        old_channel: asyncio.Queue = asyncio.Queue()
        new_channel: asyncio.Queue = asyncio.Queue()
        source.update("slow", old_channel)
        source.update("fast", new_channel)

        await asyncio.wait_for(new_channel.get(), timeout=1.0)
        fresh = source.suggestions()
        release.set()
        await asyncio.wait_for(old_channel.get(), timeout=1.0)

        assert source.suggestions() is fresh

    @pytest.mark.asyncio
    async def test_marks_follow_values(self):
        source = ListSource("fruits", ["apple", "apricot", "banana"])
        channel: asyncio.Queue = asyncio.Queue()
        source.update("", channel)
        await channel.get()

        assert source.toggle_mark(source.suggestions()[0]) is True
        source.update("ap", channel)
        await channel.get()
        assert [s.value for s in source.marked_suggestions()] == ["apple"]

        source.update("ban", channel)
        await channel.get()
        assert source.marked_suggestions() == []

    @pytest.mark.asyncio
    async def test_destroy_cancels_pending_updates(self):
        async def never(input, value):
            await asyncio.Event().wait()

        source = ListSource("words", ["a"], matcher=never)
        channel: asyncio.Queue = asyncio.Queue()
        source.update("a", channel)
        await asyncio.sleep(0)

        await source.destroy()
        # Cancelled updates still report so readiness never stalls
        assert channel.get_nowait() is source


class TestListSourceWithPrompter:
    @pytest.mark.asyncio
    async def test_end_to_end(self):
        fruits = ListSource("fruits", ["apple", "banana"])
        vegetables = ListSource("vegetables", ["asparagus", "bean"])
        prompter = Prompter([fruits, vegetables], prompt="Food")

        prompter.set_input("a")
        assert await prompter.all_ready(timeout=1.0)
        prompter.select_next_source()
        prompter.return_selection()

        outcome = await prompter.wait_for_result()
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.value == "asparagus"
        await prompter.destroy()

    @pytest.mark.asyncio
    async def test_marking_through_prompter(self):
        fruits = ListSource("fruits", ["apple", "avocado", "banana"])
        prompter = Prompter([fruits], input="a")
        assert await prompter.all_ready(timeout=1.0)

        assert prompter.toggle_mark() is True
        prompter.select_next()
        prompter.toggle_mark()
        assert prompter.return_selection() == ["apple", "avocado"]

        assert prompter.unmark_all() is True
        assert prompter.all_marked_suggestions() == []
        assert prompter.mark_all() is True
        assert len(prompter.all_marked_suggestions()) == 3
        await prompter.destroy()
