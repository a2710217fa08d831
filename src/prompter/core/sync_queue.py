"""
SyncQueue - readiness tracking for one input generation.

Every input change creates a new SyncQueue; the previous one is dropped by the
prompter. Sources still computing for the old input report on the old queue's
channel, which nobody reads anymore, so their reports are lost on purpose.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from prompter.logger import get_logger

if TYPE_CHECKING:
    from prompter.domain.protocols import Source

logger = get_logger("sync_queue")


class SyncQueue:
    """
    Tracks which sources finished updating for one generation.

    The queue is append-only: sources are recorded, never removed. A source
    recorded twice counts once.
    """

    def __init__(self, source_count: int, generation: int = 0):
        """
        Args:
            source_count: Number of sources of the owning prompter
            generation: Sequence number of the input generation
        """
        self._source_count = source_count
        self._generation = generation
        self._ready: dict[int, Source] = {}
        self.ready_channel: asyncio.Queue[Source | None] = asyncio.Queue()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def source_count(self) -> int:
        return self._source_count

    @property
    def ready_sources(self) -> list[Source]:
        """Sources recorded so far, in reporting order."""
        return list(self._ready.values())

    def record(self, source: Source) -> None:
        """Record that ``source`` finished updating."""
        if id(source) in self._ready:
            logger.debug(f"Generation {self._generation}: {source!r} reported again, ignoring")
            return
        self._ready[id(source)] = source
        logger.debug(
            f"Generation {self._generation}: {source!r} ready "
            f"({len(self._ready)}/{self._source_count})"
        )

    def is_settled(self) -> bool:
        """True once every source has been recorded."""
        return len(self._ready) >= self._source_count

    def __repr__(self) -> str:
        return f"<SyncQueue generation={self._generation} ready={len(self._ready)}/{self._source_count}>"
