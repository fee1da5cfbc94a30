"""Editor pane: a non-terminal window in the main region."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

from termtoggle.tui.widgets.messages import WindowFocused


class EditorPane(Static, can_focus=True):
    """Shows a plain buffer and collects the numeric count prefix."""

    DEFAULT_CSS = """
    EditorPane {
        height: 1fr;
        padding: 0 1;
        border: round $panel;
    }
    EditorPane:focus {
        border: round $accent;
    }
    """

    class CountDigit(Message):
        """A digit typed as part of a count prefix."""

        def __init__(self, digit: str) -> None:
            self.digit = digit
            super().__init__()

    class CommandRequested(Message):
        """'/' pressed: open the command bar."""

    def __init__(self, window: int, buffer: int, title: str, lines: list[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self.window = window
        self.buffer = buffer
        self._caption = title
        self._buffer_lines = lines

    def on_mount(self) -> None:
        body = Text(self._caption or f"[No Name] (buffer {self.buffer})", style="bold")
        for line in self._buffer_lines[-50:]:
            body.append("\n" + line)
        body.append(
            "\n\nPress the terminal key to toggle a terminal; "
            "type a number first to pick one. Type / for commands.",
            style="dim",
        )
        self.update(body)

    def on_focus(self) -> None:
        self.post_message(WindowFocused(self.window))

    def on_key(self, event: events.Key) -> None:
        if event.character and event.character.isdigit():
            event.stop()
            self.post_message(self.CountDigit(event.character))
        elif event.key == "slash":
            event.stop()
            self.post_message(self.CommandRequested())
