"""Axis-aligned box math shared by the block builder, locator and renderer."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict


class Box(BaseModel):
    """Axis-aligned box with a bottom-left origin (extraction convention)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    def flipped(self, page_height: float) -> tuple[float, float, float, float]:
        """Return ``(x0, y0, x1, y1)`` in top-left page coordinates."""
        y0 = page_height - self.y - self.height
        return (self.x, y0, self.x + self.width, y0 + self.height)


def union(boxes: Iterable[Box]) -> Box:
    """Smallest box enclosing every box in ``boxes``."""
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    for box in boxes:
        min_x = min(min_x, box.x)
        min_y = min(min_y, box.y)
        max_x = max(max_x, box.right)
        max_y = max(max_y, box.top)
    if min_x == float("inf"):
        raise ValueError("Cannot compute the union of zero boxes")
    return Box(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def overlap_extent(a: Box, b: Box) -> tuple[float, float]:
    """Width and height of the intersection of two boxes, clamped at zero."""
    overlap_x = max(0.0, min(a.right, b.right) - max(a.x, b.x))
    overlap_y = max(0.0, min(a.top, b.top) - max(a.y, b.y))
    return overlap_x, overlap_y


def overlaps(a: Box, b: Box) -> bool:
    """True when the boxes share a region of positive area."""
    overlap_x, overlap_y = overlap_extent(a, b)
    return overlap_x > 0 and overlap_y > 0
