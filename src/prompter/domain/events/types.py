"""Event types published by a prompter.

Subscribers use these to refresh displays or run actions without the
prompter knowing about them.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prompter.domain.protocols import Source


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class InputChanged(Event):
    """Published when the prompter input changes and a new generation starts.

    Attributes:
        input: The new input text
        generation: Number of the generation that just started (1-based)
    """

    input: str
    generation: int


@dataclass
class SelectionChanged(Event):
    """Published when the navigation cursor moves.

    Attributes:
        source: Newly selected source
        index: Index into the source's suggestions
    """

    source: Source
    index: int


@dataclass
class SourceReady(Event):
    """Published when a source of the current generation reports completion.

    Attributes:
        source: The source that finished updating
        generation: Generation the report belongs to
    """

    source: Source
    generation: int


@dataclass
class PrompterDestroyed(Event):
    """Published once the prompter has torn down all its sources.

    Attributes:
        prompt: Label of the destroyed prompter
    """

    prompt: str
