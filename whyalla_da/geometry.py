"""Rectangle math and directional proximity strategies for positioned text."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol

__all__ = [
    "INFINITE",
    "Box",
    "Rectangle",
    "EMPTY",
    "intersect",
    "Direction",
    "RightOf",
    "Below",
    "RIGHT",
    "BELOW",
    "overlap",
    "squared_distance",
]

INFINITE = math.inf


class Box(Protocol):
    """Anything with a top-left origin and a size (fragments and rectangles)."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


EMPTY = Rectangle(0.0, 0.0, 0.0, 0.0)


def intersect(a: Box, b: Box) -> Rectangle:
    """Return the overlap of two boxes, or the zero rectangle when they are disjoint."""
    x1 = max(a.x, b.x)
    y1 = max(a.y, b.y)
    x2 = min(a.x + a.width, b.x + b.width)
    y2 = min(a.y + a.height, b.y + b.height)
    if x2 >= x1 and y2 >= y1:
        return Rectangle(x1, y1, x2 - x1, y2 - y1)
    return EMPTY


class Direction(ABC):
    """
    Strategy for searching from an anchor box towards its neighbours.

    Each variant decides which candidates are plausibly aligned with the
    anchor (``overlaps``), how far away they are (``squared_distance``) and
    where a bounded region next to the anchor starts (``origin``).
    """

    name = "direction"

    @abstractmethod
    def overlaps(self, anchor: Box, candidate: Box) -> bool:
        """Whether ``candidate`` is aligned with ``anchor`` in this direction."""

    @abstractmethod
    def squared_distance(self, anchor: Box, candidate: Box) -> float:
        """Squared distance to ``candidate``; ``INFINITE`` on the wrong side."""

    @abstractmethod
    def origin(self, anchor: Box) -> tuple[float, float]:
        """Top-left corner of the region that starts next to ``anchor``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RightOf(Direction):
    name = "right"

    # Fraction of the anchor's width a candidate may start to the left of the
    # anchor's right edge (kerning noise).
    tolerance = 0.2

    def overlaps(self, anchor: Box, candidate: Box) -> bool:
        return (
            candidate.y < anchor.y + anchor.height
            and candidate.y + candidate.height > anchor.y
        )

    def squared_distance(self, anchor: Box, candidate: Box) -> float:
        x1 = anchor.x + anchor.width
        y1 = anchor.y + anchor.height / 2
        x2 = candidate.x
        y2 = candidate.y + candidate.height / 2
        if x2 < x1 - anchor.width * self.tolerance:
            return INFINITE
        return (x2 - x1) ** 2 + (y2 - y1) ** 2

    def origin(self, anchor: Box) -> tuple[float, float]:
        return anchor.x + anchor.width, anchor.y


class Below(Direction):
    name = "below"

    tolerance = 0.5

    def overlaps(self, anchor: Box, candidate: Box) -> bool:
        return (
            candidate.x < anchor.x + anchor.width
            and candidate.x + candidate.width > anchor.x
        )

    def squared_distance(self, anchor: Box, candidate: Box) -> float:
        x1 = anchor.x + anchor.width / 2
        y1 = anchor.y + anchor.height
        # Measure to the candidate's left part, clamped to its right edge, so
        # left-aligned values under a label score as vertically aligned.
        x2 = min(candidate.x + anchor.width / 2, candidate.x + candidate.width)
        y2 = candidate.y
        if y2 < y1 - anchor.height * self.tolerance:
            return INFINITE
        return (x2 - x1) ** 2 + (y2 - y1) ** 2

    def origin(self, anchor: Box) -> tuple[float, float]:
        return anchor.x, anchor.y + anchor.height


RIGHT = RightOf()
BELOW = Below()


def overlap(a: Box, b: Box, direction: Direction) -> bool:
    return direction.overlaps(a, b)


def squared_distance(a: Box, b: Box, direction: Direction) -> float:
    return direction.squared_distance(a, b)
