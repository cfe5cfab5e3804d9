"""
Geometry input for directional navigation.

The navigation core does not own layout. The host passes a geometry
provider (any callable mapping a focusable id to its screen Rect) to
each NavigationSystem.update() call. Providers must be side-effect
free; they may be called several times for the same id in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding box in screen coordinates (y grows down)."""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Check if point is inside rect."""
        return (self.x <= px < self.x + self.width and
                self.y <= py < self.y + self.height)

    def union(self, other: 'Rect') -> 'Rect':
        """Smallest rect containing both rects."""
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    @staticmethod
    def bounding(rects: Iterable['Rect']) -> Optional['Rect']:
        """Bounding box of several rects, None if there are none."""
        result = None
        for rect in rects:
            result = rect if result is None else result.union(rect)
        return result


# Type alias for geometry providers
GeometryProvider = Callable[[str], Rect]


class RectMap(dict):
    """
    Dict-backed geometry provider.

    Usage:
        geometry = RectMap({"new_game": Rect(0, 0, 100, 20)})
        geometry["quit"] = Rect(0, 40, 100, 20)
        system.update(geometry)
    """

    def __call__(self, focusable_id: str) -> Rect:
        return self[focusable_id]

    def set(self, focusable_id: str, x: float, y: float,
            width: float = 0, height: float = 0) -> 'RectMap':
        """Set a rect (fluent)."""
        self[focusable_id] = Rect(x, y, width, height)
        return self


def focusable_at(
    x: float,
    y: float,
    candidates: Iterable[str],
    geometry: GeometryProvider,
) -> Optional[str]:
    """
    Find which focusable is displayed under a point.

    When several overlap, the last one in `candidates` wins (drawn on top).
    """
    hit = None
    for focusable_id in candidates:
        if geometry(focusable_id).contains(x, y):
            hit = focusable_id
    return hit
