"""
Navigation system: the request dispatcher.

The NavigationSystem owns the focus and lock state. Requests are queued
with send() and handled in arrival order by update(), once per frame:

    system = NavigationSystem(tree)

    # In game loop:
    system.send(Move(Direction.DOWN))
    for event in system.update(layout_rects):
        if isinstance(event, Caught) and isinstance(event.request, Action):
            activate_button(event.from_[0])

Each update() pass:
1. Retries menus anchored by a name that was not registered yet
2. Focuses an initial element if nothing is focused, or if the focused
   element can no longer be reached from a root menu (InitiallyFocused)
3. Resolves every queued request against the state left by the
   previous one, producing one event per request
4. Publishes the events on the event bus and returns them
"""

from __future__ import annotations

import logging
from typing import Optional

from menunav.core.config import NavConfig
from menunav.core.events import (
    Caught,
    EventBus,
    FocusChanged,
    InitiallyFocused,
    NavEvent,
    NoChangeReason,
    NoChanges,
)
from menunav.core.requests import (
    Action,
    Cancel,
    FocusOn,
    Lock,
    Move,
    NavRequest,
    ScopeMove,
    Unlock,
)
from menunav.resolve.action import resolve_action, resolve_cancel
from menunav.resolve.directional import resolve_move
from menunav.resolve.focus_on import resolve_focus_on
from menunav.resolve.initial import select_initial
from menunav.resolve.lock import NavLock
from menunav.resolve.paths import Resolution, Transition, root_path, trim_common_tail
from menunav.resolve.scope import resolve_scope_move
from menunav.tree.geometry import GeometryProvider
from menunav.tree.nodes import FocusAction, FocusState
from menunav.tree.tree import NavigationTree


class NavigationSystem:
    """
    Turns navigation requests into focus changes.

    Responsibilities:
    - Request queue (processed strictly in order)
    - Lock state
    - Focus state writes (Focused leaf, Active trail, Inert rest)
    - remembered_child updates
    - Event emission
    """

    def __init__(
        self,
        tree: NavigationTree | None = None,
        config: NavConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.tree = tree if tree is not None else NavigationTree()
        self.config = config if config is not None else NavConfig()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.lock = NavLock()
        self.logger = logging.getLogger(__name__)

        self._queue: list[NavRequest] = []
        self._pass_count = 0

    # Queries

    @property
    def focused(self) -> Optional[str]:
        """Id of the focused focusable, if any."""
        focused = self.tree.focused
        return focused.id if focused else None

    @property
    def is_locked(self) -> bool:
        return self.lock.is_locked

    @property
    def pending_requests(self) -> list[NavRequest]:
        return list(self._queue)

    @property
    def pass_count(self) -> int:
        """Number of update() passes run so far."""
        return self._pass_count

    def active_trail(self) -> list[str]:
        """Focused leaf followed by the active anchors above it."""
        focused = self.focused
        return root_path(self.tree, focused) if focused else []

    # Requests

    def send(self, request: NavRequest) -> None:
        """Queue a request for the next update()."""
        self._queue.append(request)

    def send_all(self, *requests: NavRequest) -> None:
        """Queue several requests, processed in the given order."""
        self._queue.extend(requests)

    # Update

    def update(self, geometry: GeometryProvider | None = None) -> list[NavEvent]:
        """
        Run one resolution pass.

        Args:
            geometry: Bounding boxes of focusables, needed by Move requests

        Returns:
            Events produced by this pass, in order
        """
        self._pass_count += 1
        self.tree.resolve_named_parents(warn_every=self.config.unresolved_warn_passes)

        requests, self._queue = self._queue, []
        if len(requests) > 1:
            log = self.logger.warning if self.config.warn_on_multiple_requests else self.logger.debug
            log(f"{len(requests)} navigation requests in one pass, handling them in order")

        events: list[NavEvent] = []

        initial = self._ensure_focus()
        if initial is not None:
            events.append(initial)

        for request in requests:
            events.append(self.process(request, geometry))

        for event in events:
            self.event_bus.publish(event)

        return events

    def process(self, request: NavRequest, geometry: GeometryProvider | None = None) -> NavEvent:
        """
        Resolve a single request immediately.

        update() calls this for each queued request; the returned event is
        not published on the event bus. When nothing is focused yet, the
        initial focus is set first and its InitiallyFocused event is
        published right away.
        """
        focused = self.focused
        from_ = (focused,) if focused else ()

        if isinstance(request, Unlock):
            return self.lock.unlock(from_, request)

        if self.lock.is_locked:
            return NoChanges(from_, request, NoChangeReason.LOCKED)

        if isinstance(request, Lock):
            return self.lock.lock(request.reason, from_, request)

        initial = self._ensure_focus()
        if initial is not None:
            self.event_bus.publish(initial)

        focused = self.focused
        if focused is None:
            self.logger.warning(f"No focusable available to handle {request}")
            return NoChanges((), request, NoChangeReason.EMPTY_TREE)
        from_ = (focused,)

        if isinstance(request, Action):
            action = self.tree.focusable(focused).action
            if action == FocusAction.LOCK:
                return self.lock.lock(focused, from_, request)
            if action == FocusAction.CANCEL:
                resolution = resolve_cancel(self.tree, focused)
            else:
                resolution = resolve_action(self.tree, focused)
        elif isinstance(request, Cancel):
            resolution = resolve_cancel(self.tree, focused)
        elif isinstance(request, Move):
            if geometry is None:
                self.logger.warning("Move request without geometry, ignoring it")
                return NoChanges(from_, request, NoChangeReason.UNCAUGHT)
            resolution = resolve_move(
                self.tree, focused, request.direction, geometry, self.config.cone_slope,
            )
        elif isinstance(request, ScopeMove):
            resolution = resolve_scope_move(self.tree, focused, request.direction)
        elif isinstance(request, FocusOn):
            resolution = resolve_focus_on(self.tree, focused, request.target)
        else:
            raise TypeError(f"Unknown navigation request: {request!r}")

        return self._apply(focused, request, resolution)

    # Focus writes

    def _apply(self, focused: str, request: NavRequest, resolution: Resolution) -> NavEvent:
        if isinstance(resolution, Transition):
            return self._change_focus(focused, resolution.target)
        if resolution.caught:
            return Caught((focused,), request)
        return NoChanges((focused,), request, resolution.reason)

    def _change_focus(self, old: str, new: str) -> NavEvent:
        old_path = root_path(self.tree, old)
        new_path = root_path(self.tree, new)

        for focusable_id in old_path:
            focusable = self.tree.focusable(focusable_id)
            if not focusable.is_blocked:
                focusable.state = FocusState.INERT

        self._set_trail(new_path)

        from_, to = trim_common_tail(old_path, new_path)
        return FocusChanged(tuple(from_), tuple(to))

    def _set_trail(self, path: list[str]) -> None:
        """Mark path[0] focused and the rest active, remembering each step."""
        for index, focusable_id in enumerate(path):
            focusable = self.tree.focusable(focusable_id)
            if focusable.is_blocked:
                continue
            focusable.state = FocusState.FOCUSED if index == 0 else FocusState.ACTIVE
            self.tree.menu(focusable.menu).remembered_child = focusable_id

    def _ensure_focus(self) -> Optional[InitiallyFocused]:
        """
        Focus an initial element when nothing is focused, or when the
        focused element can no longer be reached from a root menu
        (its menu was detached, or an anchor above it was blocked).
        """
        focused = self.tree.focused
        if focused is not None:
            if self.tree.is_reachable(focused.id):
                return None
            self.logger.debug(f"Focused {focused.id!r} is no longer reachable, refocusing")
        elif self.tree.focusable_count == 0:
            return None

        # Clear any trail left over from a removed, blocked or detached element
        for focusable in self.tree.focusables:
            if focusable.state in (FocusState.ACTIVE, FocusState.FOCUSED):
                focusable.state = FocusState.INERT

        target = select_initial(self.tree)
        if target is None:
            return None

        self._set_trail(root_path(self.tree, target))
        self.logger.debug(f"Initial focus on {target!r}")
        return InitiallyFocused(target)
