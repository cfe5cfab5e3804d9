"""
Initial focus selection.
"""

from __future__ import annotations

from typing import Iterator, Optional

from menunav.tree.tree import NavigationTree


def iter_tree(tree: NavigationTree) -> Iterator[str]:
    """
    Focusable ids in deterministic depth-first order.

    Root menus in registration order (implicit root first); inside a
    menu, focusables in insertion order, each followed by the contents
    of the menu reachable from it.
    """
    visited: set[str] = set()

    def walk(menu_id: str) -> Iterator[str]:
        if menu_id in visited:
            return
        visited.add(menu_id)
        for focusable_id in tree.focusables_of(menu_id):
            yield focusable_id
            child = tree.child_menu(focusable_id)
            if child is not None and not tree.focusable(focusable_id).is_blocked:
                yield from walk(child.id)

    for root in tree.root_menus():
        yield from walk(root.id)


def select_initial(tree: NavigationTree) -> Optional[str]:
    """
    Pick the focusable to focus when nothing is focused.

    A prioritized focusable directly in a root menu wins; otherwise the
    first non-blocked focusable of iter_tree().
    """
    for root in tree.root_menus():
        for focusable_id in tree.available_focusables_of(root.id):
            if tree.focusable(focusable_id).priority:
                return focusable_id

    for focusable_id in iter_tree(tree):
        if not tree.focusable(focusable_id).is_blocked:
            return focusable_id
    return None
