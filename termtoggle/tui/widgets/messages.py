"""Messages shared by the window widgets."""

from __future__ import annotations

from textual.message import Message


class WindowFocused(Message):
    """The user moved focus into a window."""

    def __init__(self, window: int) -> None:
        self.window = window
        super().__init__()
