"""Main screen: editor windows on top, terminal windows docked below."""

from __future__ import annotations

import logging

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Footer, Header, Input

from termtoggle.engine.config import TermConfig
from termtoggle.engine.context import TerminalContext
from termtoggle.engine.errors import TermToggleError
from termtoggle.engine.models import TERMINAL_CONTENT_TYPE
from termtoggle.host.layout import BOTTOM_REGION, Spawner
from termtoggle.shared.commands import parse_command
from termtoggle.tui.handlers.command_handler import CommandHandler
from termtoggle.tui.host import TextualWindowManager
from termtoggle.tui.shading import BASE_BACKGROUND, shade_color, should_shade
from termtoggle.tui.widgets.editor_pane import EditorPane
from termtoggle.tui.widgets.messages import WindowFocused
from termtoggle.tui.widgets.terminal_view import TerminalView
from termtoggle.tui.widgets.tool_log import ToolLog

logger = logging.getLogger(__name__)

# Bottom region height when a terminal window has no explicit height.
FALLBACK_HEIGHT = 12


class MainScreen(Screen):
    """Workspace hosting the terminal context."""

    DEFAULT_CSS = """
    #main-region {
        height: 1fr;
    }
    #bottom-region {
        display: none;
    }
    #tool-log {
        display: none;
        height: 8;
        border-top: solid $panel;
    }
    #tool-log.visible {
        display: block;
    }
    #command-bar {
        display: none;
    }
    #command-bar.visible {
        display: block;
    }
    """

    def __init__(
        self,
        config: TermConfig,
        spawner: Spawner | None = None,
        cwd: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self._spawner = spawner
        self._cwd = cwd
        self.host: TextualWindowManager | None = None
        self.context: TerminalContext | None = None
        self.command_handler: CommandHandler | None = None
        self._count_prefix = ""
        # (window, buffer, is_terminal) per region, as last rendered
        self._rendered: dict[str, list[tuple[int, int, bool]]] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="workspace"):
            yield Vertical(id="main-region")
            yield Horizontal(id="bottom-region")
        yield ToolLog(id="tool-log")
        yield Input(placeholder="command (help lists them)", id="command-bar")
        yield Footer()

    async def on_mount(self) -> None:
        self.host = TextualWindowManager(
            self, self.config, spawner=self._spawner, cwd=self._cwd,
        )
        self.context = TerminalContext(self.host, self.config)
        self.command_handler = CommandHandler(self.context, self._log)
        self.context.init()
        await self.render_layout()

    def on_unmount(self) -> None:
        if self.context is not None:
            self.context.teardown()
        if self.host is not None:
            self.host.terminate_all()

    def _log(self, text: str) -> None:
        tl = self.query_one("#tool-log", ToolLog)
        tl.add_class("visible")
        tl.write(text)

    # ── Rendering ───────────────────────────────────────────────

    async def render_layout(self) -> None:
        """Bring the widgets in line with the host's window list."""
        host = self.host
        if host is None:
            return
        regions: dict[str, list[tuple[int, int, bool]]] = {"main": [], BOTTOM_REGION: []}
        for window in host.list_windows():
            buffer = host.get_window_buffer(window)
            is_terminal = (
                host.buffer_content_type(buffer) == TERMINAL_CONTENT_TYPE
                or host.buffer_process(buffer) is not None
            )
            regions[host.window_region(window)].append((window, buffer, is_terminal))

        containers = {
            "main": self.query_one("#main-region", Vertical),
            BOTTOM_REGION: self.query_one("#bottom-region", Horizontal),
        }
        for region, entries in regions.items():
            container = containers[region]
            if self._rendered.get(region) != entries:
                await container.remove_children()
                widgets = [self._make_window_widget(w, b, t) for w, b, t in entries]
                if widgets:
                    await container.mount_all(widgets)
                self._rendered[region] = entries

        bottom = containers[BOTTOM_REGION]
        bottom_windows = [w for w, _, _ in regions[BOTTOM_REGION]]
        bottom.display = bool(bottom_windows)
        if bottom_windows:
            heights = [host.window_height(w) or FALLBACK_HEIGHT for w in bottom_windows]
            # Leave room for the borders and the input line.
            bottom.styles.height = max(heights) + 5
        self._focus_current()

    def _make_window_widget(self, window: int, buffer: int, is_terminal: bool) -> Widget:
        host = self.host
        if not is_terminal:
            return EditorPane(
                window, buffer, host.buffer_name(buffer), host.buffer_lines(buffer),
            )
        background = None
        if should_shade(host.buffer_content_type(buffer), self.config):
            background = shade_color(BASE_BACKGROUND, self.config.shading_factor)
        return TerminalView(
            window,
            buffer,
            host.buffer_title(buffer),
            host.buffer_lines(buffer),
            prompt=host.buffer_prompt(buffer),
            background=background,
        )

    def _window_widget(self, window: int) -> Widget | None:
        for widget in self.query(TerminalView):
            if widget.window == window:
                return widget
        for widget in self.query(EditorPane):
            if widget.window == window:
                return widget
        return None

    def _focus_current(self) -> None:
        widget = self._window_widget(self.host.current_window())
        if isinstance(widget, TerminalView):
            widget.focus_input()
        elif widget is not None:
            widget.focus()

    def write_terminal_output(self, buffer: int, lines: list[str], prompt: str) -> None:
        for view in self.query(TerminalView):
            if view.buffer == buffer:
                view.write_lines(lines, prompt)

    def scroll_window_to_end(self, window: int) -> None:
        widget = self._window_widget(window)
        if isinstance(widget, TerminalView):
            widget.scroll_to_end()

    # ── Input ───────────────────────────────────────────────────

    def take_count(self) -> int:
        """Consume the typed count prefix (1 when none was typed)."""
        count = int(self._count_prefix) if self._count_prefix else 1
        self._count_prefix = ""
        self.sub_title = ""
        return count

    def on_editor_pane_count_digit(self, event: EditorPane.CountDigit) -> None:
        self._count_prefix = (self._count_prefix + event.digit).lstrip("0")
        self.sub_title = f"count: {self._count_prefix}" if self._count_prefix else ""

    def on_editor_pane_command_requested(self) -> None:
        self.action_focus_command()

    def on_window_focused(self, event: WindowFocused) -> None:
        if self.host is not None and self.host.current_window() != event.window:
            self.host.focus_window(event.window)

    def on_terminal_view_line_entered(self, event: TerminalView.LineEntered) -> None:
        process = self.host.buffer_process(event.buffer)
        try:
            self.host.send_input(process, event.line + "\n")
        except TermToggleError as exc:
            self.app.notify(str(exc), title="termtoggle", severity="error")

    def on_key(self, event: events.Key) -> None:
        if self.host is None:
            return
        callback = self.host.keymap_for(event.key, self.host.current_buffer())
        if callback is None:
            return
        event.stop()
        try:
            callback(self.take_count())
        except TermToggleError as exc:
            self.app.notify(str(exc), title="termtoggle", severity="error")

    def action_focus_command(self) -> None:
        bar = self.query_one("#command-bar", Input)
        bar.add_class("visible")
        bar.value = ""
        bar.focus()

    def action_close_window(self) -> None:
        """Close the focused window (the shell in it keeps running).

        A terminal whose shell has exited can never be re-shown, so its
        buffer is wiped along with the window.
        """
        window = self.host.current_window()
        try:
            buffer = self.host.get_window_buffer(window)
            if self.host.process_exited(buffer):
                self.host.wipe_buffer(buffer)
            else:
                self.host.hide_window(window)
        except TermToggleError as exc:
            self.app.notify(str(exc), title="termtoggle", severity="warning")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "command-bar":
            return
        event.stop()
        text = event.value.strip()
        event.input.value = ""
        event.input.remove_class("visible")
        if text:
            # The bar takes commands with or without the leading slash.
            self.command_handler.handle(parse_command(
                text if text.startswith("/") else f"/{text}"
            ))
        self._focus_current()
