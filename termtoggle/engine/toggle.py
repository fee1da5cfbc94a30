"""Toggle controller: the single entry point bound to the user's key.

With a count greater than one, operate on exactly that session: close it
if it is showing, open it otherwise (``2<key>`` toggles terminal 2).

With no count (or a count of 0/1) use a heuristic: if no terminal is
visible, open the primary terminal (1); if some are, close the
highest-numbered one that is showing. Repeated presses therefore
collapse every visible terminal one by one.
"""
from __future__ import annotations

import logging

from .host import WindowManager
from .lifecycle import LifecycleManager
from .locator import WindowLocator
from .registry import SessionRegistry
from .validation import validate_count, validate_size

logger = logging.getLogger(__name__)


class ToggleController:

    def __init__(
        self,
        host: WindowManager,
        registry: SessionRegistry,
        locator: WindowLocator,
        lifecycle: LifecycleManager,
    ) -> None:
        self._host = host
        self._registry = registry
        self._locator = locator
        self._lifecycle = lifecycle

    def toggle(self, count: int | None = 1, size: int | None = None) -> None:
        count = validate_count(count)
        size = validate_size(size)
        if count > 1:
            self.toggle_nth(count, size)
        else:
            self.smart_toggle(size)

    def toggle_nth(self, number: int, size: int | None = None) -> None:
        if self._lifecycle.is_visible(number):
            self._lifecycle.close(number)
        else:
            self._lifecycle.open(number, size)

    def smart_toggle(self, size: int | None = None) -> None:
        already_open, _ = self._locator.find_matching_windows()
        if not already_open:
            logger.debug("Smart toggle: no terminal visible, opening 1")
            self._lifecycle.open(1, size)
            return
        target = self.close_target()
        if target is None:
            self._host.notify_error("Failed to close window: no terminal sessions registered")
            return
        logger.debug("Smart toggle: closing %d", target)
        self._lifecycle.close(target)

    def close_target(self) -> int | None:
        """Highest-numbered session with a live window.

        Falls back to the highest registered number when none of them
        is showing, even though closing that one will then fail. The
        visible terminal in that case belongs to nobody we track (for
        instance after a reset, before reconciliation).
        """
        sessions = self._registry.all()
        if not sessions:
            return None
        for session in reversed(sessions):
            if self._locator.windows_for_buffer(session.buffer):
                return session.number
        return sessions[-1].number
