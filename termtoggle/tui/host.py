"""Textual host: the in-memory layout mirrored onto a screen.

The layout model stays authoritative and synchronous, so the engine
sees every change immediately; the screen catches up on the next
message-loop turn. PTY output and exits arrive on reader threads and
are marshalled onto the UI thread before touching the model.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from termtoggle.engine.config import TermConfig
from termtoggle.host.layout import Buffer, LayoutWindowManager, Spawner
from termtoggle.host.pty_process import spawn_pty_process

if TYPE_CHECKING:
    from termtoggle.tui.screens.main import MainScreen

logger = logging.getLogger(__name__)


class TextualWindowManager(LayoutWindowManager):
    """WindowManager whose windows are widgets on a MainScreen."""

    def __init__(
        self,
        screen: MainScreen,
        config: TermConfig,
        spawner: Spawner | None = None,
        cwd: str | None = None,
    ) -> None:
        self._screen = screen
        self._config = config
        self._ui_thread = threading.get_ident()
        self._render_pending = False
        super().__init__(
            spawner=spawner or spawn_pty_process,
            shell=config.shell,
            cwd=cwd,
        )

    @property
    def config(self) -> TermConfig:
        return self._config

    def _deliver(self, callback: Callable[..., None], *args: Any) -> None:
        if threading.get_ident() == self._ui_thread:
            callback(*args)
        else:
            self._screen.app.call_from_thread(callback, *args)

    def _changed(self) -> None:
        if self._render_pending:
            return
        self._render_pending = True
        self._screen.call_later(self._render)

    async def _render(self) -> None:
        self._render_pending = False
        await self._screen.render_layout()

    def _output_appended(self, buffer: Buffer, new_lines: list[str]) -> None:
        self._screen.write_terminal_output(buffer.handle, new_lines, buffer.partial)

    def scroll_to_end(self, window: Any) -> None:
        super().scroll_to_end(window)
        self._screen.scroll_window_to_end(window)

    def notify_error(self, message: str) -> None:
        super().notify_error(message)
        self._screen.app.notify(message, title="termtoggle", severity="error")

    def buffer_prompt(self, buffer: Any) -> str:
        return self._buffer(buffer).partial

    def buffer_title(self, buffer: Any) -> str:
        """Short label for a window border."""
        number = self.get_buffer_variable(buffer, "toggle_number")
        if number is not None:
            return f"terminal {number}"
        return self.buffer_name(buffer) or f"buffer {buffer}"
