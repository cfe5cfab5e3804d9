"""
Scope (tab) resolution.

A scope menu catches ScopeMove requests sent from anywhere below it,
e.g. the tab bar of a settings screen answering "next tab" while focus
is deep inside one tab's content.
"""

from __future__ import annotations

import logging
from typing import Optional

from menunav.core.events import NoChangeReason
from menunav.core.requests import ScopeDirection
from menunav.resolve.paths import Resolution, Transition, Uncaught, focus_deep
from menunav.tree.tree import NavigationTree


logger = logging.getLogger(__name__)


def step_index(index: int, direction: ScopeDirection, count: int, wrapping: bool) -> Optional[int]:
    """
    Index after one step in `direction` among `count` items.

    Returns None at either end when not wrapping.
    """
    if direction == ScopeDirection.NEXT:
        if index + 1 < count:
            return index + 1
        return 0 if wrapping else None

    if index > 0:
        return index - 1
    return count - 1 if wrapping else None


def resolve_scope_move(tree: NavigationTree, focused_id: str, direction: ScopeDirection) -> Resolution:
    """
    Resolve a ScopeMove request from `focused_id`.

    Climbs to the closest scope menu, steps among its focusables from
    the one on the active trail, then descends through remembered
    children to a leaf.
    """
    trail_child = focused_id
    menu = tree.menu_of(focused_id)
    visited: set[str] = set()

    while not menu.scope:
        if menu.id in visited:
            logger.warning(f"Navigation cycle detected while looking for a scope menu at {menu.id!r}")
            return Uncaught(NoChangeReason.CYCLE)
        visited.add(menu.id)

        if menu.reachable_from is None:
            # Reached a root (or a menu not linked yet) without scope menu
            return Uncaught()
        trail_child = menu.reachable_from
        menu = tree.menu_of(trail_child)

    tabs = tree.available_focusables_of(menu.id)
    if trail_child not in tabs:
        return Uncaught()

    index = tabs.index(trail_child)
    new_index = step_index(index, direction, len(tabs), menu.wrapping)
    if new_index is None or new_index == index:
        return Uncaught()

    return Transition(focus_deep(tree, tabs[new_index]))
