"""
ListSource - a suggestion source filtering a fixed collection of values.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any, Optional

from prompter.domain.protocols import Source
from prompter.domain.types import Suggestion
from prompter.logger import get_logger

logger = get_logger("sources.list")

Matcher = Callable[[str, Any], Optional[float]] | Callable[[str, Any], Awaitable[Optional[float]]]


def substring_matcher(input: str, value: Any) -> Optional[float]:
    """Case-insensitive match: 1.0 for a prefix, 0.5 for a substring, None otherwise.

    An empty input matches everything with score 0.
    """
    query = input.lower()
    if not query:
        return 0.0
    text = str(value).lower()
    if text.startswith(query):
        return 1.0
    if query in text:
        return 0.5
    return None


class ListSource:
    """Produces suggestions for the values matching the current input.

    Each ``update()`` runs in its own task. A newer update supersedes an older
    one: the older result is discarded, but the older task still reports on the
    channel it was given.
    """

    def __init__(
        self,
        name: str,
        values: Iterable[Any],
        *,
        matcher: Optional[Matcher] = None,
        must_match: bool = False,
    ) -> None:
        self.name = name
        self._values = list(values)
        self._matcher = matcher or substring_matcher
        self._must_match = must_match
        self._suggestions: list[Suggestion] = []
        self._marked: list[Suggestion] = []
        self._tasks: set[asyncio.Task] = set()
        self._update_count = 0

    def __repr__(self) -> str:
        return f"<ListSource {self.name}>"

    def suggestions(self) -> Sequence[Suggestion]:
        return self._suggestions

    def marked_suggestions(self) -> Sequence[Suggestion]:
        return self._marked

    def must_match(self) -> bool:
        return self._must_match

    def update(self, input: str, ready_channel: asyncio.Queue[Source]) -> None:
        self._update_count += 1
        task = asyncio.create_task(self._run_update(input, ready_channel, self._update_count))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _score(self, input: str, value: Any) -> Optional[float]:
        score = self._matcher(input, value)
        if inspect.isawaitable(score):
            score = await score
        return score

    async def _run_update(self, input: str, ready_channel: asyncio.Queue[Source], update_id: int) -> None:
        try:
            matches: list[Suggestion] = []
            for value in self._values:
                score = await self._score(input, value)
                if score is not None:
                    matches.append(Suggestion(value, score=score))
            # sorted() is stable: equal scores keep their original order
            matches = sorted(matches, key=lambda suggestion: suggestion.score, reverse=True)

            if update_id != self._update_count:
                logger.debug(f"{self!r}: discarding results for superseded input {input!r}")
                return
            # Marks follow values; a mark whose value no longer matches is dropped
            marked_values = [suggestion.value for suggestion in self._marked]
            self._suggestions = matches
            self._marked = [suggestion for suggestion in matches if suggestion.value in marked_values]
            logger.debug(f"{self!r}: {len(matches)} suggestion(s) for {input!r}")
        except asyncio.CancelledError:
            logger.debug(f"{self!r}: update for {input!r} cancelled")
            raise
        except Exception as e:
            logger.opt(exception=e).error(f"{self!r}: update for {input!r} failed: {e}")
        finally:
            ready_channel.put_nowait(self)

    # Marking

    def toggle_mark(self, suggestion: Suggestion) -> bool:
        if suggestion in self._marked:
            self._marked.remove(suggestion)
            return False
        self._marked.append(suggestion)
        return True

    def mark_all(self) -> None:
        self._marked = list(self._suggestions)

    def unmark_all(self) -> None:
        self._marked = []

    async def destroy(self) -> None:
        """Cancel pending updates and wait for them to finish."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug(f"{self!r}: cancelled {len(tasks)} pending update(s)")
