"""
Input bindings for menu navigation.

Raw input (keys, gamepad buttons) maps to NavActions; each NavAction
maps to one navigation request. Bindings are data so they can be
rebound or loaded from settings. Keys bound to UNLOCK only send Unlock
while navigation is locked, so Escape cancels the rest of the time:

    mapping = InputMapping()
    mapping.bind_key(NavAction.ACTION, pygame.K_f)
"""

from __future__ import annotations

from enum import Enum, auto

import pygame
from pydantic import BaseModel, ConfigDict, Field

from menunav.core.requests import (
    Action,
    Cancel,
    Direction,
    Move,
    NavRequest,
    ScopeDirection,
    ScopeMove,
    Unlock,
)


class NavAction(Enum):
    """Semantic navigation inputs."""
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    ACTION = auto()
    CANCEL = auto()
    NEXT_SCOPE = auto()
    PREVIOUS_SCOPE = auto()
    UNLOCK = auto()


NAV_ACTION_REQUESTS: dict[NavAction, NavRequest] = {
    NavAction.MOVE_UP: Move(Direction.UP),
    NavAction.MOVE_DOWN: Move(Direction.DOWN),
    NavAction.MOVE_LEFT: Move(Direction.LEFT),
    NavAction.MOVE_RIGHT: Move(Direction.RIGHT),
    NavAction.ACTION: Action(),
    NavAction.CANCEL: Cancel(),
    NavAction.NEXT_SCOPE: ScopeMove(ScopeDirection.NEXT),
    NavAction.PREVIOUS_SCOPE: ScopeMove(ScopeDirection.PREVIOUS),
    NavAction.UNLOCK: Unlock(),
}


DEFAULT_KEY_BINDINGS: dict[NavAction, list[int]] = {
    NavAction.MOVE_UP: [pygame.K_UP, pygame.K_w],
    NavAction.MOVE_DOWN: [pygame.K_DOWN, pygame.K_s],
    NavAction.MOVE_LEFT: [pygame.K_LEFT, pygame.K_a],
    NavAction.MOVE_RIGHT: [pygame.K_RIGHT, pygame.K_d],
    NavAction.ACTION: [pygame.K_RETURN, pygame.K_SPACE],
    NavAction.CANCEL: [pygame.K_BACKSPACE, pygame.K_ESCAPE],
    NavAction.NEXT_SCOPE: [pygame.K_e, pygame.K_TAB],
    NavAction.PREVIOUS_SCOPE: [pygame.K_q],
    NavAction.UNLOCK: [pygame.K_ESCAPE],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: dict[NavAction, list[int]] = {
    NavAction.ACTION: [0],          # A button
    NavAction.CANCEL: [1],          # B button
    NavAction.PREVIOUS_SCOPE: [4],  # Left bumper
    NavAction.NEXT_SCOPE: [5],      # Right bumper
    NavAction.UNLOCK: [7],          # Start
}


class InputMapping(BaseModel):
    """
    Navigation input bindings.

    Attributes:
        key_bindings: Keyboard bindings (NavAction -> pygame key codes)
        button_bindings: Gamepad button bindings
        stick_x_axis / stick_y_axis: Gamepad axes used as a d-pad
        stick_deadzone: Squared stick deflection below which the stick
            is considered centred
        mouse_action_button: Mouse button whose release sends Action
            on the hovered focused element
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    key_bindings: dict[NavAction, list[int]] = Field(
        default_factory=lambda: {a: list(k) for a, k in DEFAULT_KEY_BINDINGS.items()}
    )
    button_bindings: dict[NavAction, list[int]] = Field(
        default_factory=lambda: {a: list(b) for a, b in DEFAULT_GAMEPAD_BINDINGS.items()}
    )
    stick_x_axis: int = 0
    stick_y_axis: int = 1
    stick_deadzone: float = Field(default=0.36, ge=0.0)
    mouse_action_button: int = 1

    def bind_key(self, action: NavAction, key: int) -> None:
        """Add a key binding for an action."""
        keys = self.key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)

    def unbind_key(self, action: NavAction, key: int) -> None:
        """Remove a key binding for an action."""
        if key in self.key_bindings.get(action, []):
            self.key_bindings[action].remove(key)

    def actions_for_key(self, key: int) -> list[NavAction]:
        """Actions bound to a key, in binding order."""
        return [action for action, keys in self.key_bindings.items() if key in keys]

    def actions_for_button(self, button: int) -> list[NavAction]:
        """Actions bound to a gamepad button, in binding order."""
        return [action for action, buttons in self.button_bindings.items() if button in buttons]
