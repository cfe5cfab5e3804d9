"""
Navigation lock.

While locked, the navigation system ignores every request except
Unlock. Useful for widgets with their own controls (sliders, text
entry) or to suspend menu navigation during gameplay.
"""

from __future__ import annotations

import logging
from typing import Optional

from menunav.core.events import Locked, NavEvent, NoChangeReason, NoChanges, Unlocked
from menunav.core.requests import NavRequest


class NavLock:
    """Lock state owned by the navigation system."""

    def __init__(self):
        self._reason: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_locked(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> Optional[str]:
        """Why navigation is locked, None when unlocked."""
        return self._reason

    def lock(self, reason: str, from_: tuple[str, ...], request: NavRequest) -> NavEvent:
        """Lock navigation. Locking twice keeps the first reason."""
        if self.is_locked:
            return NoChanges(from_, request, NoChangeReason.LOCKED)

        self._reason = reason
        self.logger.info(f"Navigation locked ({reason!r})")
        return Locked(reason)

    def unlock(self, from_: tuple[str, ...], request: NavRequest) -> NavEvent:
        """Unlock navigation."""
        if not self.is_locked:
            self.logger.warning("Received an Unlock request while navigation is not locked")
            return NoChanges(from_, request, NoChangeReason.NOT_LOCKED)

        reason, self._reason = self._reason, None
        self.logger.info(f"Navigation unlocked ({reason!r})")
        return Unlocked(reason)
