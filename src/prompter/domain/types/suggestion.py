"""Suggestion and selection domain types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from prompter.domain.protocols import Source

__all__ = ["Suggestion", "Selection"]


@dataclass(eq=False)
class Suggestion:
    """An item produced by a source.

    Equality is identity: two suggestions carrying equal values are still
    distinct entries in their source's list.
    """

    value: Any
    """Opaque payload returned to the caller when the suggestion is chosen."""
    score: float = 0.0
    """Ranking score assigned by the producing source."""
    attributes: dict[str, Any] = field(default_factory=dict)
    """Free-form display attributes."""


@dataclass(frozen=True)
class Selection:
    """Navigation cursor: a source and an index into its suggestion list.

    The index may be out of range when the source's list changed after the
    selection was set. Readers treat that as "no suggestion selected".
    """

    source: Source
    index: int = 0
