"""termtoggle TUI: Textual application class."""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from termtoggle.engine.config import TermConfig
from termtoggle.host.layout import Spawner
from termtoggle.tui.screens.main import MainScreen


class TermToggleApp(App):
    """Terminal UI hosting toggleable shell sessions."""

    TITLE = "termtoggle"
    SUB_TITLE = "Terminal Toggle"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("f1", "open_help", "Help"),
        ("f2", "toggle_tool_log", "Log"),
        Binding("ctrl+w", "close_window", "Close Window", priority=True),
        ("escape", "cancel_or_blur", "Blur"),
    ]

    def __init__(
        self,
        config: TermConfig | None = None,
        spawner: Spawner | None = None,
        cwd: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.term_config = config or TermConfig.from_env()
        self._spawner = spawner
        self._cwd = cwd

    def on_mount(self) -> None:
        self.push_screen(MainScreen(self.term_config, spawner=self._spawner, cwd=self._cwd))

    def action_toggle_tool_log(self) -> None:
        from termtoggle.tui.widgets.tool_log import ToolLog
        screen = self.screen
        if isinstance(screen, MainScreen):
            screen.query_one(ToolLog).toggle()

    def action_close_window(self) -> None:
        screen = self.screen
        if isinstance(screen, MainScreen):
            screen.action_close_window()

    def action_open_help(self) -> None:
        """Open the key mapping help modal."""
        from termtoggle.tui.screens.help import HelpScreen

        self.push_screen(HelpScreen(mapping=self.term_config.terminal_mapping))

    def action_cancel_or_blur(self) -> None:
        self.screen.set_focus(None)
