"""Geometry value types shared by the game world.

All coordinates are world coordinates (not screen coordinates). Both types
are immutable; moving something means building a new value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """A point in the game world."""

    x: float
    y: float

    def translate(self, dx: float, dy: float) -> Position:
        return Position(self.x + dx, self.y + dy)

    def distance_to(self, other: Position) -> float:
        return ((other.x - self.x) ** 2 + (other.y - self.y) ** 2) ** 0.5


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle used for the game window and bounding boxes."""

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.left > self.right or self.top > self.bottom:
            raise ValueError(
                f"Invalid rect edges: left={self.left} top={self.top} "
                f"right={self.right} bottom={self.bottom}"
            )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def translate(self, dx: float, dy: float) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def inflate(self, dx: float, dy: float) -> Rect:
        """Grow the rect by dx on the left/right and dy on the top/bottom."""
        return Rect(self.left - dx, self.top - dy, self.right + dx, self.bottom + dy)

    def contains(self, point: Position) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def intersects(self, other: Rect) -> bool:
        # Strict overlap: rects that only share an edge do not intersect.
        return (
            self.right > other.left
            and self.left < other.right
            and self.bottom > other.top
            and self.top < other.bottom
        )

    def intersection(self, other: Rect) -> Optional[Rect]:
        """The overlapping part of both rects, or None when they do not overlap."""
        if not self.intersects(other):
            return None
        return Rect(
            max(self.left, other.left),
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )
