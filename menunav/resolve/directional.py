"""
Directional (Move) resolution.

Finds the closest focusable in the requested direction among the
focused element's siblings. When there is none, a wrapping menu cycles
to the opposite edge; a non-wrapping menu is treated as a single box and
the search is retried in its parent menu, level by level.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from menunav.core.events import NoChangeReason
from menunav.core.requests import Direction
from menunav.resolve.paths import Resolution, Transition, Uncaught
from menunav.tree.geometry import GeometryProvider, Rect
from menunav.tree.tree import NavigationTree


logger = logging.getLogger(__name__)


def _offsets(origin: tuple[float, float], point: tuple[float, float],
             direction: Direction) -> tuple[float, float]:
    """Split point - origin into (along direction, perpendicular) components."""
    dx = point[0] - origin[0]
    dy = point[1] - origin[1]
    vx, vy = direction.vector
    along = dx * vx + dy * vy
    perp = dx if not direction.is_horizontal else dy
    return along, perp


def closest_in_direction(
    origin: tuple[float, float],
    direction: Direction,
    candidates: Sequence[tuple[str, Rect]],
    cone_slope: float = 1.0,
) -> Optional[str]:
    """
    Pick the candidate closest to `origin` in `direction`.

    A candidate is eligible when its centre lies strictly ahead of origin
    and inside the cone abs(perpendicular) < along * cone_slope. Among
    eligible candidates the shortest distance wins, then the smallest
    perpendicular offset, then the earliest in `candidates`.
    """
    best = None
    best_key = None
    for index, (focusable_id, rect) in enumerate(candidates):
        along, perp = _offsets(origin, rect.center, direction)
        if along <= 0 or abs(perp) >= along * cone_slope:
            continue
        key = (math.hypot(along, perp), abs(perp), index)
        if best_key is None or key < best_key:
            best, best_key = focusable_id, key
    return best


def nearest(origin: tuple[float, float], candidates: Sequence[tuple[str, Rect]]) -> Optional[str]:
    """Candidate whose centre is nearest to origin, ties by order."""
    best = None
    best_distance = None
    for focusable_id, rect in candidates:
        cx, cy = rect.center
        distance = math.hypot(cx - origin[0], cy - origin[1])
        if best_distance is None or distance < best_distance:
            best, best_distance = focusable_id, distance
    return best


def wrap_origin(origin: tuple[float, float], direction: Direction, bounds: Rect) -> tuple[float, float]:
    """
    Mirror origin to just outside the edge of `bounds` opposite to
    `direction`, keeping its perpendicular coordinate.
    """
    x, y = origin
    if direction == Direction.RIGHT:
        return (bounds.left - 1, y)
    if direction == Direction.LEFT:
        return (bounds.right + 1, y)
    if direction == Direction.DOWN:
        return (x, bounds.top - 1)
    return (x, bounds.bottom + 1)


def _rects(ids: Sequence[str], geometry: GeometryProvider) -> list[tuple[str, Rect]]:
    result = []
    for focusable_id in ids:
        try:
            result.append((focusable_id, geometry(focusable_id)))
        except LookupError:
            logger.warning(f"No geometry for focusable {focusable_id!r}, skipping it")
    return result


def resolve_move(
    tree: NavigationTree,
    focused_id: str,
    direction: Direction,
    geometry: GeometryProvider,
    cone_slope: float = 1.0,
) -> Resolution:
    """
    Resolve a Move request from `focused_id`.

    Returns:
        Transition to the new focusable, or Uncaught when the request
        reaches a root menu without finding anything.
    """
    try:
        origin_rect = geometry(focused_id)
    except LookupError:
        logger.warning(f"No geometry for focused element {focused_id!r}, cannot move")
        return Uncaught()

    menu = tree.menu_of(focused_id)
    unit = focused_id
    visited: set[str] = set()

    while True:
        if menu.id in visited:
            logger.warning(f"Navigation cycle detected while moving {direction.name} at menu {menu.id!r}")
            return Uncaught(NoChangeReason.CYCLE)
        visited.add(menu.id)

        siblings = _rects(tree.available_focusables_of(menu.id), geometry)
        origin = origin_rect.center

        others = [(f, r) for f, r in siblings if f != unit]
        target = closest_in_direction(origin, direction, others, cone_slope)
        if target is not None:
            return Transition(target)

        if menu.wrapping:
            bounds = Rect.bounding(r for _, r in siblings)
            if bounds is None:
                return Uncaught()
            mirrored = wrap_origin(origin, direction, bounds)
            target = closest_in_direction(mirrored, direction, siblings, cone_slope)
            if target is None:
                target = nearest(mirrored, siblings)
            if target is None or target == unit:
                return Uncaught()
            return Transition(target)

        parent = tree.parent_menu(menu.id)
        if parent is None:
            return Uncaught()

        # Retry one level up, the whole menu acting as one element
        bounds = Rect.bounding(r for _, r in siblings)
        if bounds is not None:
            origin_rect = bounds
        unit = None
        menu = parent
