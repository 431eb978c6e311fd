"""Nearest-neighbour lookup of a label's value on sparse form pages."""

from __future__ import annotations

from typing import Optional, Sequence

from .geometry import INFINITE, Direction
from .models import Fragment
from .regions import find_anchor

__all__ = ["find_closest"]


def find_closest(
    fragments: Sequence[Fragment],
    label: str,
    direction: Direction,
) -> Optional[Fragment]:
    """
    Return the fragment nearest to the ``label`` fragment in ``direction``.

    The label is matched case-insensitively against the start of each
    fragment's trimmed text. Only candidates aligned with the label (see
    ``Direction.overlaps``) and on the correct side of it are considered.
    """
    anchor = find_anchor(fragments, label, prefix=True, ignore_case=True)
    if anchor is None:
        return None

    closest: Optional[Fragment] = None
    closest_distance = INFINITE
    for candidate in fragments:
        if candidate is anchor or not direction.overlaps(anchor, candidate):
            continue
        distance = direction.squared_distance(anchor, candidate)
        if distance < closest_distance:
            closest = candidate
            closest_distance = distance
    return closest
