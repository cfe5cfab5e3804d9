"""
Request resolvers.

Each resolver reads the navigation tree and returns a Resolution
(Transition or Uncaught). Only NavigationSystem writes focus states.
"""

from menunav.resolve.paths import (
    Transition,
    Uncaught,
    Resolution,
    root_path,
    trim_common_tail,
    menu_entry,
    focus_deep,
)
from menunav.resolve.directional import resolve_move, closest_in_direction
from menunav.resolve.scope import resolve_scope_move, step_index
from menunav.resolve.action import resolve_action, resolve_cancel
from menunav.resolve.focus_on import resolve_focus_on
from menunav.resolve.lock import NavLock
from menunav.resolve.initial import select_initial, iter_tree

__all__ = [
    "Transition",
    "Uncaught",
    "Resolution",
    "root_path",
    "trim_common_tail",
    "menu_entry",
    "focus_deep",
    "resolve_move",
    "closest_in_direction",
    "resolve_scope_move",
    "step_index",
    "resolve_action",
    "resolve_cancel",
    "resolve_focus_on",
    "NavLock",
    "select_initial",
    "iter_tree",
]
