"""Source protocols."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Sequence
from typing import Protocol, runtime_checkable

from prompter.domain.types import Suggestion

__all__ = ["Source", "MarkableSource"]


@runtime_checkable
class Source(Protocol):
    """Protocol for asynchronous suggestion sources.

    A source owns its suggestion list and recomputes it whenever the prompter
    input changes. The computation happens in the background: ``update`` must
    return immediately and the source reports itself on the ready channel once
    it is done.
    """

    def suggestions(self) -> Sequence[Suggestion]:
        """Return the current ordered suggestions.

        Returns:
            The live suggestion list, which may change between calls
        """
        ...

    def marked_suggestions(self) -> Sequence[Suggestion]:
        """Return the subset of suggestions the user marked."""
        ...

    def must_match(self) -> bool:
        """Return ``True`` when a result must come from this source's suggestions."""
        ...

    def update(self, input: str, ready_channel: asyncio.Queue[Source]) -> None:
        """Recompute suggestions for ``input`` in the background.

        Args:
            input: The new prompter input
            ready_channel: Queue to put ``self`` on exactly once when the
                update finishes, including when it fails
        """
        ...

    def destroy(self) -> None | Awaitable[None]:
        """Release resources held by the source.

        May be a coroutine function; the prompter awaits it.
        """
        ...


@runtime_checkable
class MarkableSource(Source, Protocol):
    """A source that lets the user mark suggestions."""

    def toggle_mark(self, suggestion: Suggestion) -> bool:
        """Flip the mark on ``suggestion`` and return whether it is now marked."""
        ...

    def mark_all(self) -> None:
        """Mark every current suggestion."""
        ...

    def unmark_all(self) -> None:
        """Clear every mark."""
        ...
