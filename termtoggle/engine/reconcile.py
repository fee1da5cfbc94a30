"""Rebuild registry entries from terminal windows that are still visible.

Used when the registry was reset (a fresh context over a live host)
while windows and shells survived. Windows are matched by buffer name
rather than content type, because a reset may also have lost the
content type.
"""
from __future__ import annotations

import logging

from .errors import NameFormatError
from .host import WindowManager
from .locator import WindowLocator
from .models import TERMINAL_CONTENT_TYPE, Session
from .naming import has_name_marker, parse_session_number
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


def reconcile(
    host: WindowManager,
    registry: SessionRegistry,
    locator: WindowLocator,
) -> list[int]:
    """Register untracked terminal windows; returns the recovered numbers."""
    has_open, windows = locator.find_matching_windows(
        lambda buffer: has_name_marker(host.buffer_name(buffer))
    )
    if not has_open:
        return []

    tracked = registry.tracked_windows()
    recovered: list[int] = []
    for window in windows:
        if window in tracked:
            continue
        buffer = host.get_window_buffer(window)
        try:
            number = parse_session_number(host.buffer_name(buffer))
        except NameFormatError as exc:
            logger.warning("Reconcile: skipping window %s: %s", window, exc)
            continue

        existing = registry.get(number)
        if existing is not None and locator.is_window_alive(existing.window):
            logger.debug(
                "Reconcile: terminal %d already shown in window %s; skipping %s",
                number, existing.window, window,
            )
            continue

        registry.put(Session(
            number=number,
            working_directory=host.getcwd(),
            window=window,
            buffer=buffer,
            process=host.buffer_process(buffer),
        ))
        host.set_buffer_content_type(buffer, TERMINAL_CONTENT_TYPE)
        tracked.add(window)
        recovered.append(number)

    if recovered:
        logger.info("Reconciled terminals: %s", ", ".join(map(str, recovered)))
    return recovered
