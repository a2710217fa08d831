"""Domain types shared across the prompter core."""

from prompter.domain.types.readiness import OutcomeKind, PromptOutcome, Readiness
from prompter.domain.types.suggestion import Selection, Suggestion

__all__ = [
    "OutcomeKind",
    "PromptOutcome",
    "Readiness",
    "Selection",
    "Suggestion",
]
