"""Terminal view: one window showing a shell buffer.

Output is rendered line by line through rich's ANSI decoder; this is a
log of the shell, not a screen emulator. The input line below it sends
whole lines to the shell.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.color import Color
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Input, RichLog

from termtoggle.tui.widgets.messages import WindowFocused


class TerminalView(Vertical):
    """Output log plus an input line for one terminal window."""

    DEFAULT_CSS = """
    TerminalView {
        height: 100%;
        width: 1fr;
        border: round $panel;
    }
    TerminalView:focus-within {
        border: round $accent;
    }
    TerminalView > RichLog {
        height: 1fr;
    }
    TerminalView > Input {
        height: 3;
    }
    """

    class LineEntered(Message):
        """A line typed into the terminal's input."""

        def __init__(self, buffer: int, line: str) -> None:
            self.buffer = buffer
            self.line = line
            super().__init__()

    def __init__(
        self,
        window: int,
        buffer: int,
        title: str,
        lines: list[str],
        prompt: str = "",
        background: Color | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.window = window
        self.buffer = buffer
        self.border_title = title
        self._initial_lines = lines
        self._prompt = prompt
        self._shade = background
        self._replayed = False

    def compose(self) -> ComposeResult:
        yield RichLog(auto_scroll=True, wrap=False, max_lines=5000)
        yield Input(placeholder=Text.from_ansi(self._prompt).plain.strip() or "$")

    def on_mount(self) -> None:
        if self._shade is not None:
            self.add_class("shaded")
            self.styles.background = self._shade
        log = self.query_one(RichLog)
        for line in self._initial_lines:
            log.write(Text.from_ansi(line))
        self._replayed = True

    def write_lines(self, lines: list[str], prompt: str = "") -> None:
        if not self._replayed:
            return  # on_mount replays the buffer
        log = self.query_one(RichLog)
        for line in lines:
            log.write(Text.from_ansi(line))
        self.query_one(Input).placeholder = Text.from_ansi(prompt).plain.strip() or "$"

    def scroll_to_end(self) -> None:
        if self._replayed:
            self.query_one(RichLog).scroll_end(animate=False)

    def focus_input(self) -> None:
        self.query_one(Input).focus()

    def on_descendant_focus(self) -> None:
        self.post_message(WindowFocused(self.window))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.LineEntered(self.buffer, event.value))
        event.input.value = ""
