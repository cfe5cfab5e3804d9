"""Default pygame input bindings for menu navigation."""

from menunav.input.mapping import (
    NavAction,
    NAV_ACTION_REQUESTS,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
    InputMapping,
)
from menunav.input.handler import NavInputHandler, HAT_DIRECTIONS

__all__ = [
    "NavAction",
    "NAV_ACTION_REQUESTS",
    "DEFAULT_KEY_BINDINGS",
    "DEFAULT_GAMEPAD_BINDINGS",
    "InputMapping",
    "NavInputHandler",
    "HAT_DIRECTIONS",
]
