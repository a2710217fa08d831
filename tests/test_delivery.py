"""Tests for result delivery and prompter teardown."""

import asyncio

import pytest

from prompter.core import Prompter, wait_for_result
from prompter.domain.errors import PrompterDestroyedError, SourceDestroyError
from prompter.domain.types import OutcomeKind


class TestWaitForResult:
    @pytest.mark.asyncio
    async def test_result_outcome(self, make_source):
        prompter = Prompter([make_source("only", ["foo"])])
        prompter.return_selection()

        outcome = await wait_for_result(prompter)
        assert outcome.kind is OutcomeKind.RESULT
        assert outcome.value == "foo"

    @pytest.mark.asyncio
    async def test_input_outcome(self, make_source):
        prompter = Prompter([make_source("empty")])
        prompter.set_input("abc")
        waiter = asyncio.create_task(prompter.wait_for_result())
        await asyncio.sleep(0)

        prompter.return_selection()
        outcome = await asyncio.wait_for(waiter, timeout=1.0)
        assert outcome.value == "abc"

    @pytest.mark.asyncio
    async def test_destroy_cancels_blocked_waiter(self, two_sources):
        prompter = Prompter(two_sources)
        waiter = asyncio.create_task(wait_for_result(prompter))
        await asyncio.sleep(0.01)
        assert not waiter.done()

        await prompter.destroy()
        outcome = await asyncio.wait_for(waiter, timeout=1.0)

        assert outcome.cancelled
        assert outcome.value is None
        assert not prompter.result_channel.is_filled
        # The interrupt was consumed exactly once
        assert not prompter.interrupt_channel.is_ready

    @pytest.mark.asyncio
    async def test_result_after_destroy_never_reaches_waiter(self, make_source):
        for _ in range(40):
            prompter = Prompter([make_source("only", ["foo"])])
            waiter = asyncio.create_task(wait_for_result(prompter))
            await asyncio.sleep(0)

            await prompter.destroy()
            with pytest.raises(PrompterDestroyedError):
                prompter.return_selection()
            with pytest.raises(PrompterDestroyedError):
                prompter.return_input()

            outcome = await asyncio.wait_for(waiter, timeout=1.0)
            assert outcome.cancelled
            assert not prompter.result_channel.is_filled


class TestDestroy:
    @pytest.mark.asyncio
    async def test_hooks_and_sources_run_in_order(self, two_sources):
        calls = []
        for source in two_sources:
            source.destroy = lambda name=source.name: calls.append(name)

        async def after():
            calls.append("after")

        prompter = Prompter(
            two_sources,
            before_destructor=lambda: calls.append("before"),
            after_destructor=after,
        )
        await prompter.destroy()

        assert calls == ["before", "first", "second", "after"]
        assert prompter.interrupt_channel.is_ready

    @pytest.mark.asyncio
    async def test_async_source_destructors_are_awaited(self, two_sources):
        done = []

        async def slow_destroy():
            await asyncio.sleep(0.01)
            done.append(True)

        two_sources[0].destroy = slow_destroy
        await Prompter(two_sources).destroy()

        assert done == [True]
        assert two_sources[1].destroyed == 1

    @pytest.mark.asyncio
    async def test_failing_source_does_not_skip_others(self, two_sources):
        def broken():
            raise RuntimeError("boom")

        two_sources[0].destroy = broken
        prompter = Prompter(two_sources)

        with pytest.raises(SourceDestroyError) as excinfo:
            await prompter.destroy()

        assert two_sources[1].destroyed == 1
        assert excinfo.value.failures[0][0] is two_sources[0]
        assert prompter.interrupt_channel.is_ready

    @pytest.mark.asyncio
    async def test_destroy_runs_once(self, two_sources):
        prompter = Prompter(two_sources)
        await prompter.destroy()
        await prompter.destroy()

        assert prompter.destroyed
        assert two_sources[0].destroyed == 1

    @pytest.mark.asyncio
    async def test_failing_before_hook_does_not_skip_teardown(self, two_sources):
        calls = []

        def before():
            raise RuntimeError("before failed")

        prompter = Prompter(
            two_sources,
            before_destructor=before,
            after_destructor=lambda: calls.append("after"),
        )

        with pytest.raises(SourceDestroyError) as excinfo:
            await prompter.destroy()

        assert [source.destroyed for source in two_sources] == [1, 1]
        assert calls == ["after"]
        assert excinfo.value.failures[0][0] == "before_destructor"
        assert prompter.interrupt_channel.is_ready

    @pytest.mark.asyncio
    async def test_hook_and_source_failures_are_raised_together(self, two_sources):
        def broken():
            raise RuntimeError("source failed")

        async def after():
            raise RuntimeError("after failed")

        two_sources[0].destroy = broken
        prompter = Prompter(two_sources, after_destructor=after)

        with pytest.raises(SourceDestroyError) as excinfo:
            await prompter.destroy()

        owners = [owner for owner, _ in excinfo.value.failures]
        assert owners == [two_sources[0], "after_destructor"]
        assert two_sources[1].destroyed == 1
        assert prompter.interrupt_channel.is_ready

    @pytest.mark.asyncio
    async def test_input_after_destroy_raises(self, two_sources):
        prompter = Prompter(two_sources)
        await prompter.destroy()

        with pytest.raises(PrompterDestroyedError):
            prompter.set_input("late")
        assert two_sources[0].updates == []
