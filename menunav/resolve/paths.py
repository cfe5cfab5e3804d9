"""
Shared helpers for request resolution.

Resolvers only read the tree. They return a Resolution: either a
Transition naming the focusable that should become focused, or an
Uncaught result telling the navigation system why nothing happens.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from menunav.core.events import NoChangeReason
from menunav.tree.nodes import Menu
from menunav.tree.tree import NavigationTree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Focus should move to `target`."""
    target: str


@dataclass(frozen=True)
class Uncaught:
    """
    The request does not change focus.

    Attributes:
        reason: Reported in the NoChanges event
        caught: Report a Caught event instead of NoChanges
    """
    reason: NoChangeReason = NoChangeReason.UNCAUGHT
    caught: bool = False


Resolution = Union[Transition, Uncaught]


def root_path(tree: NavigationTree, focusable_id: str) -> list[str]:
    """
    Path from a focusable up to its root menu.

    Returns [focusable, anchor of its menu, anchor of that anchor's
    menu, ...]. Stops at a root menu, a pending menu, or (with a
    warning) when a menu would be visited twice.
    """
    path = [focusable_id]
    visited = set()
    menu = tree.menu_of(focusable_id)
    while menu.reachable_from is not None:
        if menu.id in visited:
            logger.warning(f"Navigation cycle detected above {focusable_id!r} at menu {menu.id!r}")
            break
        visited.add(menu.id)
        path.append(menu.reachable_from)
        menu = tree.menu_of(menu.reachable_from)
    return path


def trim_common_tail(first: list[str], second: list[str]) -> tuple[list[str], list[str]]:
    """
    Remove the ancestors shared by two root paths.

    Only the elements whose state changes remain. Each path keeps at
    least one element.
    """
    first = list(first)
    second = list(second)
    while len(first) > 1 and len(second) > 1 and first[-1] == second[-1]:
        first.pop()
        second.pop()
    return first, second


def menu_entry(tree: NavigationTree, menu: Menu, use_priority: bool = False) -> Optional[str]:
    """
    Focusable to focus when entering `menu`.

    The remembered child wins, then (if use_priority) the first
    prioritized focusable, then the first non-blocked one.
    """
    available = tree.available_focusables_of(menu.id)
    if not available:
        return None

    if menu.remembered_child in available:
        return menu.remembered_child

    if use_priority:
        for focusable_id in available:
            if tree.focusable(focusable_id).priority:
                return focusable_id

    return available[0]


def focus_deep(tree: NavigationTree, focusable_id: str) -> str:
    """
    Follow remembered children down from a focusable.

    While the focusable opens a menu that has something to focus, step
    into it. Returns the deepest focusable reached.
    """
    visited = set()
    current = focusable_id
    child = tree.child_menu(current)
    while child is not None and child.id not in visited:
        visited.add(child.id)
        entry = menu_entry(tree, child)
        if entry is None:
            break
        current = entry
        child = tree.child_menu(current)
    return current
