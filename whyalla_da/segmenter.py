"""Split register pages into one group of fragments per application."""

from __future__ import annotations

from typing import List, Sequence

from .geometry import INFINITE
from .models import Fragment

__all__ = ["DEFAULT_MARKER", "find_markers", "row_top", "segment_bands", "segment_page"]

DEFAULT_MARKER = "Application No"


def find_markers(fragments: Sequence[Fragment], marker: str = DEFAULT_MARKER) -> List[Fragment]:
    """Return the fragments starting with ``marker``, top of the page first."""
    markers = [fragment for fragment in fragments if fragment.text.strip().startswith(marker)]
    markers.sort(key=lambda fragment: fragment.y)
    return markers


def row_top(fragments: Sequence[Fragment], start: Fragment) -> float:
    """
    Return the smallest y of every fragment on the same row as ``start``.

    Fragments on one printed row can sit a little above or below each other,
    so a row begins at the highest fragment vertically overlapping ``start``
    and never below ``start`` itself.
    """
    top = start.y
    for fragment in fragments:
        if fragment.y < start.y + start.height and fragment.y + fragment.height > start.y:
            top = min(top, fragment.y)
    return top


def segment_bands(
    fragments: Sequence[Fragment],
    marker: str = DEFAULT_MARKER,
) -> List[tuple[float, float]]:
    """Return the half-open ``[top, bottom)`` band of every section on the page."""
    tops = [row_top(fragments, start) for start in find_markers(fragments, marker)]
    bottoms = tops[1:] + [INFINITE]
    return list(zip(tops, bottoms))


def segment_page(
    fragments: Sequence[Fragment],
    marker: str = DEFAULT_MARKER,
) -> List[List[Fragment]]:
    """
    Group a page's fragments into one list per ``marker`` occurrence.

    A fragment belongs to the section whose band contains its top edge.
    Fragments above the first marker row belong to no section. Input order is
    preserved inside each section.
    """
    return [
        [fragment for fragment in fragments if top <= fragment.y < bottom]
        for top, bottom in segment_bands(fragments, marker)
    ]
