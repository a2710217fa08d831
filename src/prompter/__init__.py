"""Asynchronous multi-source prompter.

Example:
    ```python
    from prompter import ListSource, Prompter

    prompter = Prompter([ListSource("fruits", ["apple", "banana"])], prompt="Fruit")
    prompter.set_input("ap")
    await prompter.all_ready()
    prompter.return_selection()
    outcome = await prompter.wait_for_result()
    ```
"""

from prompter.config import PrompterConfig
from prompter.core import Prompter, SingleSlotChannel, SyncQueue, wait_for_result
from prompter.domain.errors import (
    ChannelEmptyError,
    ChannelFullError,
    NoMatchError,
    PrompterDestroyedError,
    PrompterError,
    SourceDestroyError,
)
from prompter.domain.protocols import MarkableSource, Source
from prompter.domain.types import OutcomeKind, PromptOutcome, Readiness, Selection, Suggestion
from prompter.sources import ListSource

__all__ = [
    "ChannelEmptyError",
    "ChannelFullError",
    "ListSource",
    "MarkableSource",
    "NoMatchError",
    "OutcomeKind",
    "PromptOutcome",
    "Prompter",
    "PrompterConfig",
    "PrompterDestroyedError",
    "PrompterError",
    "Readiness",
    "Selection",
    "SingleSlotChannel",
    "Source",
    "SourceDestroyError",
    "Suggestion",
    "SyncQueue",
    "wait_for_result",
]
