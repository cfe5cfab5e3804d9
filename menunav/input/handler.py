"""
Default input handling for menu navigation.

Translates pygame events into navigation requests and queues them on a
NavigationSystem. Hosts with their own input layer can skip this module
and call NavigationSystem.send() directly.

Usage:
    handler = NavInputHandler(system, geometry=layout_rects)

    for event in pygame.event.get():
        handler.process_event(event)
    system.update(layout_rects)
"""

from __future__ import annotations

import logging

import pygame

from menunav.core.requests import Action, Direction, FocusOn, Move, NavRequest, Unlock
from menunav.input.mapping import NAV_ACTION_REQUESTS, InputMapping, NavAction
from menunav.system import NavigationSystem
from menunav.tree.geometry import GeometryProvider, Rect, focusable_at


# D-pad values (pygame reports y = 1 for up)
HAT_DIRECTIONS: dict[tuple[int, int], Direction] = {
    (0, 1): Direction.UP,
    (0, -1): Direction.DOWN,
    (-1, 0): Direction.LEFT,
    (1, 0): Direction.RIGHT,
}


class NavInputHandler:
    """
    Turns keyboard, gamepad and mouse events into navigation requests.

    - Keys and gamepad buttons: one request per press
    - D-pad and left stick: one Move per deflection (the stick must
      return inside the dead zone before the next Move)
    - Mouse: hovering a focusable focuses it, releasing the action
      button over the focused element sends Action
    """

    def __init__(
        self,
        system: NavigationSystem,
        mapping: InputMapping | None = None,
        geometry: GeometryProvider | None = None,
    ):
        self.system = system
        self.mapping = mapping or InputMapping()
        self.geometry = geometry
        self.logger = logging.getLogger(__name__)

        self._axis_values: dict[int, float] = {}
        self._stick_held = False

    def process_event(self, event: pygame.event.Event) -> NavRequest | None:
        """
        Process a pygame event.

        Returns:
            The request queued on the navigation system, if any
        """
        request = None

        if event.type == pygame.KEYDOWN:
            request = self._request_for(self.mapping.actions_for_key(event.key))

        elif event.type == pygame.JOYBUTTONDOWN:
            request = self._request_for(self.mapping.actions_for_button(event.button))

        elif event.type == pygame.JOYHATMOTION:
            direction = HAT_DIRECTIONS.get(tuple(event.value))
            if direction is not None:
                request = Move(direction)

        elif event.type == pygame.JOYAXISMOTION:
            request = self._on_axis_motion(event.axis, event.value)

        elif event.type == pygame.MOUSEMOTION:
            request = self._on_mouse_motion(event.pos)

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == self.mapping.mouse_action_button:
                request = self._on_mouse_release(event.pos)

        if request is not None:
            self.system.send(request)
        return request

    def _request_for(self, actions: list[NavAction]) -> NavRequest | None:
        """Unlock wins while locked; otherwise the first other bound action."""
        if self.system.is_locked and NavAction.UNLOCK in actions:
            return Unlock()
        for action in actions:
            if action != NavAction.UNLOCK:
                return NAV_ACTION_REQUESTS[action]
        return None

    def _on_axis_motion(self, axis: int, value: float) -> NavRequest | None:
        """Left stick acts as a d-pad with a dead zone."""
        if axis not in (self.mapping.stick_x_axis, self.mapping.stick_y_axis):
            return None

        self._axis_values[axis] = value
        x = self._axis_values.get(self.mapping.stick_x_axis, 0.0)
        y = self._axis_values.get(self.mapping.stick_y_axis, 0.0)

        if x * x + y * y <= self.mapping.stick_deadzone:
            self._stick_held = False
            return None
        if self._stick_held:
            return None

        direction = Direction.from_vector(x, y)
        if direction is None:
            return None
        self._stick_held = True
        return Move(direction)

    def _hovered(self, pos: tuple[int, int]) -> str | None:
        if self.geometry is None:
            return None
        candidates = [f.id for f in self.system.tree.focusables if not f.is_blocked]
        return focusable_at(pos[0], pos[1], candidates, self._safe_geometry)

    def _safe_geometry(self, focusable_id: str) -> Rect:
        try:
            return self.geometry(focusable_id)
        except LookupError:
            # Not laid out (e.g. off screen), never under the cursor
            return Rect()

    def _on_mouse_motion(self, pos: tuple[int, int]) -> NavRequest | None:
        hovered = self._hovered(pos)
        if hovered is None or hovered == self.system.focused:
            return None
        return FocusOn(hovered)

    def _on_mouse_release(self, pos: tuple[int, int]) -> NavRequest | None:
        hovered = self._hovered(pos)
        if hovered is None:
            return None
        if hovered != self.system.focused:
            return FocusOn(hovered)
        return Action()
