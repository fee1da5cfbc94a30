"""Window locator: which host windows are visible, and which are terminals."""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .host import WindowManager
from .models import TERMINAL_CONTENT_TYPE

# Classifies a buffer handle; the locator keeps windows whose buffer matches.
BufferPredicate = Callable[[Any], bool]


class WindowLocator:
    """Query live windows through the host.

    Nothing here is cached: a window can be closed by the user at any
    moment, so every question goes back to the host.
    """

    def __init__(self, host: WindowManager) -> None:
        self._host = host

    def is_terminal_buffer(self, buffer: Any) -> bool:
        return self._host.buffer_content_type(buffer) == TERMINAL_CONTENT_TYPE

    def find_matching_windows(
        self, predicate: BufferPredicate | None = None,
    ) -> tuple[bool, list[Any]]:
        """Return ``(found, windows)`` in host enumeration order.

        The default predicate matches buffers whose content type is the
        terminal marker.
        """
        predicate = predicate or self.is_terminal_buffer
        matches = [
            window for window in self._host.list_windows()
            if predicate(self._host.get_window_buffer(window))
        ]
        return bool(matches), matches

    def is_window_alive(self, window: Any) -> bool:
        if window is None:
            return False
        return self._host.is_window_valid(window)

    def windows_for_buffer(self, buffer: Any) -> list[Any]:
        if buffer is None or not self._host.buffer_exists(buffer):
            return []
        return self._host.windows_for_buffer(buffer)
