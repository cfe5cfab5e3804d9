"""
FocusOn resolution: jumping to an arbitrary focusable.
"""

from __future__ import annotations

import logging

from menunav.core.events import NoChangeReason
from menunav.resolve.paths import Resolution, Transition, Uncaught
from menunav.tree.tree import NavigationTree


logger = logging.getLogger(__name__)


def resolve_focus_on(tree: NavigationTree, focused_id: str | None, target: str) -> Resolution:
    """
    Validate a FocusOn target.

    Unknown and blocked targets, and targets behind a blocked anchor or
    in a menu not linked yet, are rejected with a warning. Targeting the focused element is a no-op.
    """
    focusable = tree.get_focusable(target)
    if focusable is None:
        logger.warning(f"FocusOn target {target!r} is not a registered focusable")
        return Uncaught(NoChangeReason.INVALID_TARGET)

    if focusable.is_blocked:
        logger.warning(f"FocusOn target {target!r} is blocked")
        return Uncaught(NoChangeReason.INVALID_TARGET)

    if not tree.is_reachable(target):
        logger.warning(
            f"FocusOn target {target!r} cannot be reached from a root menu "
            f"(menu {focusable.menu!r} is not linked yet or an anchor above it is blocked)"
        )
        return Uncaught(NoChangeReason.INVALID_TARGET)

    if target == focused_id:
        return Uncaught(NoChangeReason.ALREADY_FOCUSED)

    return Transition(target)
