"""
Result delivery: wait until a prompter produces a result or is destroyed.
"""

from __future__ import annotations

import asyncio
import random
from typing import TYPE_CHECKING, Any

from prompter.domain.errors import ChannelEmptyError
from prompter.domain.types import OutcomeKind, PromptOutcome
from prompter.logger import get_logger

if TYPE_CHECKING:
    from prompter.core.channels import SingleSlotChannel
    from prompter.core.prompter import Prompter

logger = get_logger("delivery")


async def race(channels: dict[OutcomeKind, SingleSlotChannel[Any]]) -> PromptOutcome:
    """
    Wait on several single-slot channels and consume whichever fires first.

    When more than one channel is ready at the same time the winner is picked
    at random, so no channel is favoured by its position.

    Raises:
        ChannelEmptyError: If the winning channel was already consumed
    """
    waiters = {asyncio.create_task(channel.wait()): kind for kind, channel in channels.items()}
    try:
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in waiters:
            if not task.done():
                task.cancel()
        await asyncio.gather(*waiters, return_exceptions=True)

    ready = [kind for kind, channel in channels.items() if channel.is_ready]
    if not ready:
        raise ChannelEmptyError("Every channel in the race was already read")

    kind = random.choice(ready)
    value = channels[kind].get_nowait()
    logger.debug(f"Race resolved with {kind.value} ({len(ready)} channel(s) ready)")
    return PromptOutcome(kind, value)


async def wait_for_result(prompter: Prompter) -> PromptOutcome:
    """
    Block until ``prompter`` returns a result or gets destroyed.

    Returns:
        ``PromptOutcome(RESULT, value)`` or ``PromptOutcome(CANCELLED)``.
        A cancellation carries no value.
    """
    outcome = await race(
        {
            OutcomeKind.RESULT: prompter.result_channel,
            OutcomeKind.CANCELLED: prompter.interrupt_channel,
        }
    )
    if outcome.cancelled:
        return PromptOutcome(OutcomeKind.CANCELLED)
    return outcome
