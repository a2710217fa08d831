"""
Selection arithmetic over the concatenation of all sources' suggestions.

Source lists change length while updates run, so nothing here caches a global
index: every move recomputes absolute positions from the current lengths.
All functions are pure; they return a new ``Selection`` (or ``None`` when the
move is impossible) and leave storing it to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

from prompter.domain.protocols import Source
from prompter.domain.types import Selection, Suggestion

__all__ = [
    "source_position",
    "total_suggestions",
    "absolute_index",
    "resolve_index",
    "select",
    "select_source",
    "select_first",
    "select_last",
    "resolve_selection",
    "clamp_selection",
]


def _last_index(source: Source) -> int:
    return max(len(source.suggestions()) - 1, 0)


def source_position(sources: Sequence[Source], source: Source) -> int:
    """
    Position of ``source`` in ``sources``, compared by identity.

    Raises:
        ValueError: If the source does not belong to ``sources``
    """
    for position, candidate in enumerate(sources):
        if candidate is source:
            return position
    raise ValueError(f"{source!r} is not one of the prompter sources")


def total_suggestions(sources: Sequence[Source]) -> int:
    return sum(len(source.suggestions()) for source in sources)


def absolute_index(sources: Sequence[Source], selection: Selection) -> int:
    """Index of the selection in the concatenated suggestion list."""
    position = source_position(sources, selection.source)
    before = sum(len(source.suggestions()) for source in sources[:position])
    return before + selection.index


def resolve_index(sources: Sequence[Source], index: int) -> Selection | None:
    """
    Map an absolute index back to a (source, index) pair.

    Walks the sources in order, subtracting each length until the remainder
    falls inside a source. Returns ``None`` for a negative index or an index
    past the end.
    """
    if index < 0:
        return None
    remainder = index
    for source in sources:
        length = len(source.suggestions())
        if remainder < length:
            return Selection(source, remainder)
        remainder -= length
    return None


def select(
    sources: Sequence[Source],
    selection: Selection | None,
    steps: int,
    wrap_over: bool = False,
) -> Selection | None:
    """
    Move ``selection`` by ``steps`` suggestions across source boundaries.

    Args:
        sources: Prompter sources in order
        selection: Current selection
        steps: Signed number of suggestions to move
        wrap_over: Wrap around both ends instead of stopping at them

    Returns:
        The new selection, or ``None`` when nothing should change (zero steps,
        no selection, or no suggestions at all)
    """
    if steps == 0 or selection is None:
        return None
    limit = total_suggestions(sources)
    if limit == 0:
        return None

    new_index = absolute_index(sources, selection) + steps
    if wrap_over:
        new_index %= limit
    else:
        new_index = min(max(new_index, 0), limit - 1)
    return resolve_index(sources, new_index)


def select_source(
    sources: Sequence[Source],
    selection: Selection | None,
    steps: int,
) -> Selection | None:
    """
    Move ``steps`` sources forward or backward, stopping at the first/last one.

    Moving forward lands on the first suggestion of the destination source,
    moving backward on its last one.
    """
    if steps == 0 or selection is None or not sources:
        return None
    position = source_position(sources, selection.source)
    destination = sources[min(max(position + steps, 0), len(sources) - 1)]
    index = 0 if steps > 0 else _last_index(destination)
    return Selection(destination, index)


def select_first(sources: Sequence[Source]) -> Selection | None:
    if not sources:
        return None
    return Selection(sources[0], 0)


def select_last(sources: Sequence[Source]) -> Selection | None:
    if not sources:
        return None
    return Selection(sources[-1], _last_index(sources[-1]))


def resolve_selection(selection: Selection | None) -> Suggestion | None:
    """The suggestion under the cursor, or ``None`` when the index is stale."""
    if selection is None:
        return None
    suggestions = selection.source.suggestions()
    if 0 <= selection.index < len(suggestions):
        return suggestions[selection.index]
    return None


def clamp_selection(selection: Selection | None) -> Selection | None:
    """
    Pull a stale index back inside its source's current list.

    Returns the clamped selection, or ``None`` when it was already in range.
    """
    if selection is None:
        return None
    last = _last_index(selection.source)
    if selection.index <= last:
        return None
    return Selection(selection.source, last)
