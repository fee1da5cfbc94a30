"""Where a terminal window appears when it is opened or re-shown."""
from __future__ import annotations

import logging

from .host import SplitDirection, WindowManager
from .locator import WindowLocator

logger = logging.getLogger(__name__)


class PlacementPolicy:
    """Keep terminal windows clustered together.

    The first terminal gets a horizontal split pinned to the bottom of
    the layout; later ones are split vertically beside the most
    recently opened terminal window.
    """

    def __init__(self, host: WindowManager, locator: WindowLocator) -> None:
        self._host = host
        self._locator = locator

    def place(self, size: int):
        """Create and focus the target window; returns its handle."""
        has_open, windows = self._locator.find_matching_windows()
        if has_open:
            # Split to the right of the terminal window opened last.
            anchor = windows[-1]
            self._host.focus_window(anchor)
            window = self._host.split(SplitDirection.VERTICAL)
            logger.debug("Placed window %s beside terminal window %s", window, anchor)
        else:
            window = self._host.split(SplitDirection.HORIZONTAL, size)
            self._host.move_window_to_bottom(window)
            logger.debug("Placed window %s at the bottom (height=%d)", window, size)
        return window

    def resize(self, window, size: int) -> None:
        self._host.resize_window(window, size)
