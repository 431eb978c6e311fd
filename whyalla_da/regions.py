"""Anchor lookup and bounded-region text extraction."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .geometry import BELOW, INFINITE, RIGHT, Direction, Rectangle, intersect
from .logging import get_logger
from .models import Fragment

__all__ = ["find_anchor", "extract_region", "text_right_of", "text_below", "join_fragments"]

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def find_anchor(
    fragments: Sequence[Fragment],
    label: str,
    *,
    prefix: bool = False,
    ignore_case: bool = False,
) -> Optional[Fragment]:
    """
    Return the first fragment whose trimmed text matches ``label``.

    Labels are expected to appear once per page (or page section). When more
    than one fragment matches, the first one in input order is still used and
    an ``ambiguous_anchor`` warning is logged.
    """
    wanted = label.lower() if ignore_case else label

    found: list[Fragment] = []
    for fragment in fragments:
        text = fragment.text.strip()
        if ignore_case:
            text = text.lower()
        if (prefix and text.startswith(wanted)) or text == wanted:
            found.append(fragment)

    if not found:
        return None
    if len(found) > 1:
        logger.warning(
            "ambiguous_anchor",
            label=label,
            matches=len(found),
            chosen_x=found[0].x,
            chosen_y=found[0].y,
        )
    return found[0]


def join_fragments(fragments: Sequence[Fragment]) -> str:
    """Join fragments in reading order (top to bottom, then left to right)."""
    ordered = sorted(fragments, key=lambda fragment: (fragment.y, fragment.x))
    return _WHITESPACE.sub(" ", " ".join(fragment.text for fragment in ordered)).strip()


def extract_region(
    fragments: Sequence[Fragment],
    top_left: str,
    right_bound: Optional[str] = None,
    bottom_bound: Optional[str] = None,
    direction: Direction = RIGHT,
) -> Optional[str]:
    """
    Return the text inside the rectangle delineated by up to three labels.

    The rectangle starts at ``direction.origin`` of the ``top_left`` label and
    runs to the left edge of the ``right_bound`` label and the top edge of the
    ``bottom_bound`` label (unbounded when a label is absent). Every fragment
    lying more than half inside the rectangle is part of the value. Returns
    None when the ``top_left`` label is not on the page.
    """
    anchor = find_anchor(fragments, top_left)
    if anchor is None:
        return None
    right_anchor = find_anchor(fragments, right_bound) if right_bound is not None else None
    bottom_anchor = find_anchor(fragments, bottom_bound) if bottom_bound is not None else None

    x, y = direction.origin(anchor)
    width = INFINITE if right_anchor is None else max(0.0, right_anchor.x - x)
    height = INFINITE if bottom_anchor is None else max(0.0, bottom_anchor.y - y)
    bounds = Rectangle(x, y, width, height)

    inside = [
        fragment
        for fragment in fragments
        if _is_member(fragment, bounds)
    ]
    return join_fragments(inside)


def text_right_of(
    fragments: Sequence[Fragment],
    top_left: str,
    right_bound: Optional[str] = None,
    bottom_bound: Optional[str] = None,
) -> Optional[str]:
    return extract_region(fragments, top_left, right_bound, bottom_bound, RIGHT)


def text_below(
    fragments: Sequence[Fragment],
    top: str,
    right_bound: Optional[str] = None,
    bottom_bound: Optional[str] = None,
) -> Optional[str]:
    return extract_region(fragments, top, right_bound, bottom_bound, BELOW)


def _is_member(fragment: Fragment, bounds: Rectangle) -> bool:
    # A lone colon is the tail of a label, never part of a value.
    if fragment.text.strip() == ":":
        return False
    area = fragment.area
    if area <= 0:
        return False
    return intersect(fragment, bounds).area * 2 > area
