"""
Action and Cancel resolution: entering and leaving sub-menus.
"""

from __future__ import annotations

from menunav.resolve.paths import Resolution, Transition, Uncaught, menu_entry
from menunav.tree.tree import NavigationTree


def resolve_action(tree: NavigationTree, focused_id: str) -> Resolution:
    """
    Enter the menu reachable from the focused element.

    The menu's remembered child is focused, else its first prioritized
    focusable, else its first available one. When the focused element
    opens no menu, the request is caught for the host to handle.
    """
    child = tree.child_menu(focused_id)
    if child is None:
        return Uncaught(caught=True)

    entry = menu_entry(tree, child, use_priority=True)
    if entry is None:
        return Uncaught(caught=True)
    return Transition(entry)


def resolve_cancel(tree: NavigationTree, focused_id: str) -> Resolution:
    """
    Leave the current menu, focusing the element it was entered from.

    The left menu keeps its remembered child, so coming back with Action
    restores the same element. Cancel in a root menu is caught.
    """
    menu = tree.menu_of(focused_id)
    anchor_id = menu.reachable_from
    if anchor_id is None:
        return Uncaught(caught=True)

    if tree.focusable(anchor_id).is_blocked:
        return Uncaught()
    return Transition(anchor_id)
