"""
Navigation request definitions.

Requests are the only way to change focus. Input code (keyboard,
gamepad, mouse, scripted tests) produces requests; the navigation
system consumes them one at a time, in arrival order.

Usage:
    system.send(Move(Direction.RIGHT))
    system.send(ScopeMove(ScopeDirection.NEXT))
    system.send(Action())
    system.send(FocusOn("options_button"))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class Direction(Enum):
    """Planar direction for Move requests (screen space, y grows down)."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    @property
    def vector(self) -> tuple[float, float]:
        """Unit vector pointing in this direction."""
        vectors = {
            Direction.UP: (0.0, -1.0),
            Direction.DOWN: (0.0, 1.0),
            Direction.LEFT: (-1.0, 0.0),
            Direction.RIGHT: (1.0, 0.0),
        }
        return vectors[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @staticmethod
    def from_vector(dx: float, dy: float) -> Direction | None:
        """
        Get the dominant direction of a vector.

        Returns None for a zero vector or an exact diagonal.
        """
        if abs(dx) > abs(dy):
            return Direction.RIGHT if dx > 0 else Direction.LEFT
        if abs(dy) > abs(dx):
            return Direction.DOWN if dy > 0 else Direction.UP
        return None


class ScopeDirection(Enum):
    """Ordering direction for ScopeMove requests (tab switching)."""
    PREVIOUS = auto()
    NEXT = auto()


@dataclass(frozen=True)
class Move:
    """Move focus physically in a direction."""
    direction: Direction


@dataclass(frozen=True)
class ScopeMove:
    """Switch to the previous/next tab of the closest scope menu."""
    direction: ScopeDirection


@dataclass(frozen=True)
class Action:
    """Confirm the focused element (enters sub-menus)."""


@dataclass(frozen=True)
class Cancel:
    """Leave the current sub-menu."""


@dataclass(frozen=True)
class FocusOn:
    """Jump directly to an arbitrary focusable."""
    target: str


@dataclass(frozen=True)
class Lock:
    """Freeze navigation until an Unlock request arrives."""
    reason: str = ""


@dataclass(frozen=True)
class Unlock:
    """Release a previous Lock."""


NavRequest = Union[Move, ScopeMove, Action, Cancel, FocusOn, Lock, Unlock]
