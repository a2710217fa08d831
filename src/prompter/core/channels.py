"""
Single-slot channels used to hand a prompter's outcome to its caller.

A prompter owns two of them: the result channel, written by
``return_selection``/``return_input``, and the interrupt channel, written by
``destroy``. Each accepts exactly one value and yields it exactly once.
"""

import asyncio
from typing import Generic, TypeVar

from prompter.domain.errors import ChannelEmptyError, ChannelFullError

T = TypeVar("T")

__all__ = ["SingleSlotChannel"]


class SingleSlotChannel(Generic[T]):
    """Write-once, read-once channel.

    ``wait()`` blocks until a value is present without consuming it, so a
    caller can race several channels and then consume only the winner.
    """

    def __init__(self, name: str = "channel"):
        self._name = name
        self._event = asyncio.Event()
        self._value: T | None = None
        self._filled = False
        self._consumed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_filled(self) -> bool:
        """True once a value was put, even if it has been read since."""
        return self._filled

    @property
    def is_ready(self) -> bool:
        """True when a value is waiting to be read."""
        return self._filled and not self._consumed

    def put(self, value: T) -> None:
        """
        Store the channel's only value and wake up waiters.

        Raises:
            ChannelFullError: If a value was already put
        """
        if self._filled:
            raise ChannelFullError(f"{self._name} already holds a value")
        self._value = value
        self._filled = True
        self._event.set()

    async def wait(self) -> None:
        """Wait until a value has been put."""
        await self._event.wait()

    def get_nowait(self) -> T:
        """
        Consume the value.

        Raises:
            ChannelEmptyError: If nothing was put yet or the value was already read
        """
        if not self._filled:
            raise ChannelEmptyError(f"{self._name} is empty")
        if self._consumed:
            raise ChannelEmptyError(f"{self._name} was already read")
        self._consumed = True
        value = self._value
        self._value = None
        return value  # type: ignore[return-value]

    async def get(self) -> T:
        """Wait for the value and consume it."""
        await self.wait()
        return self.get_nowait()

    def __repr__(self) -> str:
        state = "ready" if self.is_ready else ("consumed" if self._filled else "empty")
        return f"<SingleSlotChannel {self._name} {state}>"
