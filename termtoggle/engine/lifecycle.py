"""Session lifecycle: open, close, delete and exec.

State diagram for one session number:

    (absent) ──open──> VISIBLE ──close──> HIDDEN ──open──> VISIBLE
                          │                  │
                          └── process exit ──┴──> (absent)

Opening an absent (or exited) session spawns a new shell; opening a
hidden one only re-shows its existing buffer in a fresh window.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from termtoggle.adapters.events import ProcessStarted, ProcessTerminated, WindowEntered

from .config import TermConfig
from .errors import NameFormatError
from .host import WindowManager
from .locator import WindowLocator
from .models import TERMINAL_CONTENT_TYPE, Session
from .naming import format_buffer_name, has_name_marker, parse_session_number
from .placement import PlacementPolicy
from .registry import SessionRegistry
from .validation import coerce_number, resolve_size, validate_command, validate_number

logger = logging.getLogger(__name__)

# Re-invokes toggle with the count typed before the mapping.
ToggleCallback = Callable[[int], Any]


class LifecycleManager:
    """Create, show, hide and forget terminal sessions."""

    def __init__(
        self,
        host: WindowManager,
        registry: SessionRegistry,
        locator: WindowLocator,
        placement: PlacementPolicy,
        config: TermConfig,
        toggle_callback: ToggleCallback | None = None,
    ) -> None:
        self._host = host
        self._registry = registry
        self._locator = locator
        self._placement = placement
        self._config = config
        self._toggle_callback = toggle_callback

    # ── Operations ──────────────────────────────────────────────

    def open(self, number: int, size: int | None = None) -> Session:
        number = validate_number(number)
        size = resolve_size(size, self._config.default_size)

        session = self._registry.get_or_create(number)
        if not session.has_buffer or not self._host.buffer_exists(session.buffer):
            session.unbind()
            self._start(session, size)
        else:
            self._reshow(session, size)
        return session

    def _start(self, session: Session, size: int) -> None:
        number = session.number
        window = self._placement.place(size)
        buffer = self._host.create_buffer(listed=False)
        self._host.set_window_buffer(window, buffer)
        self._host.set_buffer_directory(buffer, self._host.getcwd())

        name = format_buffer_name(self._host.shell, number)
        # Spawn errors propagate; the session keeps unbound handles so
        # the next open starts from scratch.
        process = self._host.spawn_process(buffer, name)

        self._host.on_process_exit(buffer, lambda: self._process_exited(number, buffer))
        self._apply_buffer_mappings(buffer)
        self._apply_terminal_options(number, buffer, window)

        session.window = window
        session.buffer = buffer
        session.process = process
        logger.info(
            "Opened terminal %d (window=%s buffer=%s pid=%s)",
            number, window, buffer, getattr(process, "pid", process),
        )

    def _reshow(self, session: Session, size: int) -> None:
        window = self._placement.place(size)
        self._placement.resize(window, size)
        self._host.set_window_buffer(window, session.buffer)
        self._host.set_window_fixed_height(window, True)
        session.window = window
        logger.info("Re-showed terminal %d in window %s", session.number, window)

    def close(self, number: int) -> bool:
        """Hide the session's window; the shell keeps running."""
        number = validate_number(number)
        session = self._registry.get(number)
        if session is None or not self._locator.is_window_alive(session.window):
            self._host.notify_error(f"Failed to close window: {number} does not exist")
            logger.debug("Close of terminal %d ignored: no live window", number)
            return False
        self._host.hide_window(session.window)
        session.window = None
        logger.info("Hid terminal %d", number)
        return True

    def delete(self, number: int) -> None:
        """Forget the session (its process has exited)."""
        if self._registry.delete(number):
            logger.info("Deleted terminal %d", number)

    def _process_exited(self, number: int, buffer: Any) -> None:
        # Reconcile may have rebound the number to another buffer since.
        session = self._registry.get(number)
        if session is not None and session.buffer == buffer:
            self.delete(number)

    def is_visible(self, number: int) -> bool:
        session = self._registry.get(number)
        return session is not None and self._locator.is_window_alive(session.window)

    def exec(self, cmd: str, number: int = 1, size: int | None = None) -> Session:
        """Run *cmd* in terminal *number*, opening it first if needed."""
        cmd = validate_command(cmd)
        number = coerce_number(number)
        size = resolve_size(size, self._config.default_size)

        if not self.is_visible(number):
            self.open(number, size)
        session = self._registry.get_or_create(number)

        self._host.send_input(session.process, f"clear\n{cmd}\n")
        self._host.scroll_to_end(session.window)
        self._host.focus_previous_window()
        self._host.stop_insert()
        logger.info("Sent command to terminal %d: %s", number, cmd)
        return session

    # ── Buffer setup ────────────────────────────────────────────

    def _apply_terminal_options(self, number: int, buffer: Any, window: Any) -> None:
        if window is not None:
            self._host.set_window_fixed_height(window, True)
        self._host.set_buffer_listed(buffer, False)
        self._host.set_buffer_content_type(buffer, TERMINAL_CONTENT_TYPE)
        self._host.set_buffer_variable(buffer, "toggle_number", number)

    def _apply_buffer_mappings(self, buffer: Any) -> None:
        mapping = self._config.terminal_mapping
        if mapping and self._toggle_callback is not None:
            self._host.set_buffer_keymap(buffer, mapping, self._toggle_callback)

    # ── Host events ─────────────────────────────────────────────

    def handle_window_entered(self, event: WindowEntered) -> None:
        """Don't leave a terminal as the only window in the layout."""
        if len(self._host.list_windows()) != 1:
            return
        buffer = self._host.get_window_buffer(event.window)
        if self._host.buffer_content_type(buffer) != TERMINAL_CONTENT_TYPE:
            return
        session = self._registry.find_by_buffer(buffer)
        if session is not None:
            session.window = None
            logger.info("Terminal %d was the last window; detaching it", session.number)
        self._host.switch_to_alternate_buffer(event.window)

    def handle_process_started(self, event: ProcessStarted) -> None:
        """Adopt terminals whose process was started outside open()."""
        name = event.name or self._host.buffer_name(event.buffer)
        if not has_name_marker(name):
            return
        try:
            number = parse_session_number(name)
        except NameFormatError as exc:
            logger.warning("Ignoring started terminal: %s", exc)
            return
        if number in self._registry:
            return
        session = self._registry.get_or_create(number)
        session.buffer = event.buffer
        session.window = event.window
        session.process = event.process
        if event.window is not None:
            self._placement.resize(event.window, self._config.default_size)
        self._host.on_process_exit(
            event.buffer, lambda: self._process_exited(number, event.buffer),
        )
        self._apply_terminal_options(number, event.buffer, event.window)
        logger.info("Adopted externally started terminal %d", number)

    def handle_process_terminated(self, event: ProcessTerminated) -> None:
        session = self._registry.find_by_buffer(event.buffer)
        if session is None:
            return
        logger.debug(
            "Process in buffer %s exited (code=%s)", event.buffer, event.exit_code,
        )
        self.delete(session.number)
