"""Event system for decoupled prompter notifications.

Example:
    ```python
    from prompter.domain.events import EventBus, SelectionChanged

    event_bus = EventBus()
    event_bus.subscribe(SelectionChanged, lambda event: print(event.index))
    ```
"""

from .bus import EventBus
from .types import (
    Event,
    InputChanged,
    PrompterDestroyed,
    SelectionChanged,
    SourceReady,
)

__all__ = [
    "EventBus",
    "Event",
    "InputChanged",
    "PrompterDestroyed",
    "SelectionChanged",
    "SourceReady",
]
