"""Prompter core: readiness tracking, navigation and result delivery."""

from prompter.core.channels import SingleSlotChannel
from prompter.core.delivery import race, wait_for_result
from prompter.core.prompter import Prompter
from prompter.core.sync_queue import SyncQueue

__all__ = [
    "Prompter",
    "SingleSlotChannel",
    "SyncQueue",
    "race",
    "wait_for_result",
]
