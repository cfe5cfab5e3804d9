"""
menunav

Menu focus navigation for games: directional moves between buttons,
nested sub-menus, tabbed scopes and navigation locks.

Quick Start:
    from menunav import (
        NavigationSystem, NavigationTree, Focusable, Menu, AnchorRef,
        RectMap, Move, Direction, Action,
    )

    tree = NavigationTree()
    tree.register(Focusable(id="new_game"))
    tree.register(Focusable(id="options"))
    tree.register_menu(Menu(id="options_menu"), AnchorRef.by_id("options"))
    tree.register(Focusable(id="volume"), "options_menu")

    geometry = RectMap().set("new_game", 0, 0, 100, 20).set("options", 0, 40, 100, 20)

    system = NavigationSystem(tree)
    system.send(Move(Direction.DOWN))
    system.send(Action())
    events = system.update(geometry)   # focus is now on "volume"
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Re-export core components for convenience
from menunav.core import (
    Direction,
    ScopeDirection,
    Move,
    ScopeMove,
    Action,
    Cancel,
    FocusOn,
    Lock,
    Unlock,
    NavRequest,
    NavEventType,
    NoChangeReason,
    NavEvent,
    NoChanges,
    FocusChanged,
    InitiallyFocused,
    Locked,
    Unlocked,
    Caught,
    EventBus,
    NavConfig,
)
from menunav.tree import (
    ROOT_MENU,
    FocusState,
    FocusAction,
    Focusable,
    MenuSetting,
    AnchorRef,
    Menu,
    NavigationTree,
    NavTreeError,
    DuplicateNodeError,
    UnknownNodeError,
    AnchorConflictError,
    Rect,
    RectMap,
    load_layout,
)
from menunav.system import NavigationSystem
from menunav.input import InputMapping, NavInputHandler

__all__ = [
    # Requests
    "Direction",
    "ScopeDirection",
    "Move",
    "ScopeMove",
    "Action",
    "Cancel",
    "FocusOn",
    "Lock",
    "Unlock",
    "NavRequest",
    # Events
    "NavEventType",
    "NoChangeReason",
    "NavEvent",
    "NoChanges",
    "FocusChanged",
    "InitiallyFocused",
    "Locked",
    "Unlocked",
    "Caught",
    "EventBus",
    # Tree
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
    "load_layout",
    # System
    "NavigationSystem",
    "NavConfig",
    # Input
    "InputMapping",
    "NavInputHandler",
]
