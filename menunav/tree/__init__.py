"""Navigation tree: nodes, the tree arena, geometry input and layout loading."""

from menunav.tree.nodes import (
    ROOT_MENU,
    FocusState,
    FocusAction,
    Focusable,
    MenuSetting,
    AnchorRef,
    Menu,
)
from menunav.tree.tree import (
    NavigationTree,
    NavTreeError,
    DuplicateNodeError,
    UnknownNodeError,
    AnchorConflictError,
)
from menunav.tree.geometry import Rect, RectMap, GeometryProvider, focusable_at
from menunav.tree.loader import FocusableSpec, MenuSpec, LayoutLoader, load_layout

__all__ = [
    "ROOT_MENU",
    "FocusState",
    "FocusAction",
    "Focusable",
    "MenuSetting",
    "AnchorRef",
    "Menu",
    "NavigationTree",
    "NavTreeError",
    "DuplicateNodeError",
    "UnknownNodeError",
    "AnchorConflictError",
    "Rect",
    "RectMap",
    "GeometryProvider",
    "focusable_at",
    "FocusableSpec",
    "MenuSpec",
    "LayoutLoader",
    "load_layout",
]
