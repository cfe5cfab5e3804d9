"""
Core navigation types.

Exports:
- Requests: Move, ScopeMove, Action, Cancel, FocusOn, Lock, Unlock
- Events: NoChanges, FocusChanged, InitiallyFocused, Locked, Unlocked, Caught
- EventBus, NavEventType: Event delivery
- NavConfig: Resolution tunables
"""

from menunav.core.requests import (
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
)
from menunav.core.events import (
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
)
from menunav.core.config import NavConfig, DEFAULT_CONFIG

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
    # Config
    "NavConfig",
    "DEFAULT_CONFIG",
]
