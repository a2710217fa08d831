"""Shared fixtures and stub sources for prompter tests."""

import asyncio
from typing import Any, Optional

import pytest

from prompter.domain.types import Suggestion


class StubSource:
    """Source whose updates complete only when the test says so."""

    def __init__(self, name: str, values: Optional[list[Any]] = None, must_match: bool = False):
        self.name = name
        self._suggestions = [Suggestion(value) for value in values or []]
        self._marked: list[Suggestion] = []
        self._must_match = must_match
        self.updates: list[tuple[str, asyncio.Queue]] = []
        self.destroyed = 0

    def __repr__(self) -> str:
        return f"<StubSource {self.name}>"

    def suggestions(self):
        return self._suggestions

    def marked_suggestions(self):
        return self._marked

    def must_match(self) -> bool:
        return self._must_match

    def update(self, input: str, ready_channel: asyncio.Queue) -> None:
        self.updates.append((input, ready_channel))

    def finish(self, values: Optional[list[Any]] = None) -> None:
        """Complete the latest update, optionally replacing the suggestions."""
        if values is not None:
            self.set_values(values)
        _, ready_channel = self.updates[-1]
        ready_channel.put_nowait(self)

    def set_values(self, values: list[Any]) -> None:
        self._suggestions = [Suggestion(value) for value in values]

    def mark(self, index: int) -> None:
        self._marked.append(self._suggestions[index])

    def destroy(self) -> None:
        self.destroyed += 1


class SelfReportingSource(StubSource):
    """Stub that reports as soon as it is updated."""

    def update(self, input: str, ready_channel: asyncio.Queue) -> None:
        super().update(input, ready_channel)
        ready_channel.put_nowait(self)


@pytest.fixture
def make_source():
    """Factory for stub sources."""

    def _make(name: str = "source", values: Optional[list[Any]] = None, **kwargs) -> StubSource:
        return StubSource(name, values, **kwargs)

    return _make


@pytest.fixture
def two_sources(make_source):
    """Two sources with 3 and 2 suggestions."""
    return [
        make_source("first", ["a0", "a1", "a2"]),
        make_source("second", ["b0", "b1"]),
    ]


@pytest.fixture
def make_reporting_source():
    """Factory for sources that report right after each update."""

    def _make(name: str = "source", values: Optional[list[Any]] = None, **kwargs) -> SelfReportingSource:
        return SelfReportingSource(name, values, **kwargs)

    return _make
