"""
Navigation events and the event bus that delivers them.

Every processed request produces exactly one event describing what the
navigation system did with it. The host application reads them from
the list returned by NavigationSystem.update(), or subscribes on the
EventBus:

    def on_focus(event: FocusChanged):
        play_sound("cursor")

    bus.subscribe(NavEventType.FOCUS_CHANGED, on_focus)

Paths (`from_`, `to`) are ordered leaf first: index 0 is the focusable
that lost/gained focus, followed by the ancestor anchors whose state
changed along with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, ClassVar, Optional
from weakref import WeakMethod, ref

from menunav.core.requests import NavRequest


logger = logging.getLogger(__name__)


class NavEventType(Enum):
    """Kinds of navigation events."""
    NO_CHANGES = auto()
    FOCUS_CHANGED = auto()
    INITIALLY_FOCUSED = auto()
    LOCKED = auto()
    UNLOCKED = auto()
    CAUGHT = auto()


class NoChangeReason(Enum):
    """Why a request left the focus untouched."""
    UNCAUGHT = auto()        # Nothing in the requested direction / no target menu
    ALREADY_FOCUSED = auto()
    INVALID_TARGET = auto()  # FocusOn on an unknown or blocked focusable
    EMPTY_TREE = auto()
    LOCKED = auto()          # Navigation is locked
    NOT_LOCKED = auto()      # Unlock while not locked
    CYCLE = auto()


@dataclass(frozen=True)
class NavEvent:
    """Base class for navigation events."""
    type: ClassVar[NavEventType]


@dataclass(frozen=True)
class NoChanges(NavEvent):
    """The request was processed but focus did not change."""
    type: ClassVar[NavEventType] = NavEventType.NO_CHANGES
    from_: tuple[str, ...]
    request: NavRequest
    reason: NoChangeReason = NoChangeReason.UNCAUGHT


@dataclass(frozen=True)
class FocusChanged(NavEvent):
    """Focus moved from one focusable to another."""
    type: ClassVar[NavEventType] = NavEventType.FOCUS_CHANGED
    from_: tuple[str, ...]
    to: tuple[str, ...]

    @property
    def focused(self) -> str:
        """The newly focused focusable."""
        return self.to[0]

    @property
    def previous(self) -> str:
        """The focusable that was focused before."""
        return self.from_[0]


@dataclass(frozen=True)
class InitiallyFocused(NavEvent):
    """First focus of the tree (nothing was focused before)."""
    type: ClassVar[NavEventType] = NavEventType.INITIALLY_FOCUSED
    to: str


@dataclass(frozen=True)
class Locked(NavEvent):
    """Navigation is now locked."""
    type: ClassVar[NavEventType] = NavEventType.LOCKED
    reason: str


@dataclass(frozen=True)
class Unlocked(NavEvent):
    """Navigation was unlocked; `reason` is the one given when locking."""
    type: ClassVar[NavEventType] = NavEventType.UNLOCKED
    reason: str


@dataclass(frozen=True)
class Caught(NavEvent):
    """
    The request is valid but the navigation system deliberately did
    nothing with it, e.g. Action on a focusable that opens no menu.

    Hosts typically treat a caught Action as "button pressed".
    """
    type: ClassVar[NavEventType] = NavEventType.CAUGHT
    from_: tuple[str, ...]
    request: NavRequest


NavEventHandler = Callable[[NavEvent], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any  # the handler, or a weak reference to it
    one_shot: bool

    def resolve(self) -> Optional[NavEventHandler]:
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Delivers navigation events to subscribed handlers.

    Handlers are called by descending priority, in subscription order
    for equal priorities. By default handlers are held weakly, so a
    deleted listener object silently drops out.
    """

    def __init__(self):
        self._subscriptions: dict[NavEventType, list[_Subscription]] = {}
        self._pending: list[NavEvent] = []
        self._delivering = False

    def subscribe(
        self,
        event_type: NavEventType,
        handler: NavEventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Register a handler for one kind of event.

        Args:
            event_type: Kind of event to receive
            handler: Called with the event
            priority: Higher runs first
            one_shot: Drop the handler after its first call
            weak: Hold the handler through a weak reference
        """
        target: Any = handler
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)

        subscriptions = self._subscriptions.setdefault(event_type, [])
        subscriptions.append(_Subscription(priority, target, one_shot))
        # list.sort is stable: equal priorities keep subscription order
        subscriptions.sort(key=lambda s: -s.priority)

    def unsubscribe(self, event_type: NavEventType, handler: NavEventHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            subscriptions[:] = [s for s in subscriptions if s.resolve() != handler]

    def publish(self, event: NavEvent) -> None:
        """
        Deliver an event to its subscribers.

        An event published from inside a handler is delivered once the
        current one has reached every subscriber.
        """
        self._pending.append(event)
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._pending:
                self._deliver(self._pending.pop(0))
        finally:
            self._delivering = False

    def clear(self, event_type: NavEventType | None = None) -> None:
        """Drop the handlers of one event type, or all handlers."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _deliver(self, event: NavEvent) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        spent = []
        for subscription in list(subscriptions):
            handler = subscription.resolve()
            if handler is None:
                spent.append(subscription)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception(f"Navigation event handler failed on {event.type.name}")

            if subscription.one_shot:
                spent.append(subscription)

        if spent:
            subscriptions[:] = [s for s in subscriptions if s not in spent]
