"""Readiness and result outcome types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["Readiness", "OutcomeKind", "PromptOutcome"]


class Readiness(Enum):
    """Sentinels returned by readiness queries.

    A readiness query otherwise returns the source that just reported.
    """

    ALL_READY = "all_ready"
    NOT_READY = "not_ready"


class OutcomeKind(Enum):
    """How a prompter wait finished."""

    RESULT = "result"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PromptOutcome:
    """What a caller waiting on a prompter observes."""

    kind: OutcomeKind
    value: Any = None

    @property
    def cancelled(self) -> bool:
        """True when the prompter was destroyed before producing a result."""
        return self.kind is OutcomeKind.CANCELLED
