"""In-memory window manager.

Models a host layout the way a split-window editor does: a list of
windows (enumerated top-left to bottom-right), each showing one buffer;
buffers outlive the windows that display them; a terminal buffer owns at
most one shell process. Processes come from an injected spawner, so the
model runs the same with real PTYs or with test doubles.

The Textual host subclasses this and mirrors every change to the screen.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from termtoggle.adapters.event_bus import EventBus
from termtoggle.adapters.events import ProcessStarted, ProcessTerminated, WindowEntered
from termtoggle.engine.errors import HostError
from termtoggle.engine.host import KeymapCallback, SplitDirection

logger = logging.getLogger(__name__)

FIRST_WINDOW = 1000
FIRST_BUFFER = 1
MAX_BUFFER_LINES = 5000

MAIN_REGION = "main"
BOTTOM_REGION = "bottom"


class ShellProcess(Protocol):
    """What the layout needs from a spawned process."""
    pid: int

    def write(self, data: str) -> None: ...
    def terminate(self) -> None: ...


# spawner(command, cwd, on_output, on_exit) -> ShellProcess
Spawner = Callable[
    [str, str, Callable[[str], None], Callable[[int | None], None]],
    ShellProcess,
]


@dataclass
class Buffer:
    handle: int
    name: str = ""
    content_type: str = ""
    listed: bool = True
    directory: str | None = None
    process: Any = None
    exited: bool = False
    lines: list[str] = field(default_factory=list)
    # Output after the last newline (usually the shell prompt).
    partial: str = ""
    variables: dict[str, Any] = field(default_factory=dict)
    keymaps: dict[str, KeymapCallback] = field(default_factory=dict)
    exit_hooks: list[Callable[[], None]] = field(default_factory=list)


@dataclass
class Window:
    handle: int
    buffer: int
    region: str = MAIN_REGION
    height: int | None = None
    fixed_height: bool = False
    cursor_line: int = 0


class LayoutWindowManager:
    """Window/buffer/process bookkeeping implementing ``WindowManager``."""

    def __init__(
        self,
        spawner: Spawner | None = None,
        shell: str | None = None,
        cwd: str | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.events = events or EventBus()
        self.shell = shell or os.environ.get("SHELL") or "/bin/sh"
        self._spawner = spawner
        self._cwd = cwd
        self._next_window = FIRST_WINDOW
        self._next_buffer = FIRST_BUFFER
        self._buffers: dict[int, Buffer] = {}
        self._windows: dict[int, Window] = {}
        self._order: list[int] = []
        self._global_keymaps: dict[str, KeymapCallback] = {}
        self.insert_mode = False
        self.errors: list[str] = []

        first = self._new_buffer(listed=True)
        window = self._new_window(first.handle)
        self._order.append(window.handle)
        self._current = window.handle
        self._previous: int | None = None

    # ── Internals ───────────────────────────────────────────────

    def _new_buffer(self, listed: bool) -> Buffer:
        buffer = Buffer(handle=self._next_buffer, listed=listed)
        self._next_buffer += 1
        self._buffers[buffer.handle] = buffer
        return buffer

    def _new_window(self, buffer: int, region: str = MAIN_REGION) -> Window:
        window = Window(handle=self._next_window, buffer=buffer, region=region)
        self._next_window += 1
        self._windows[window.handle] = window
        return window

    def _window(self, handle: Any) -> Window:
        try:
            return self._windows[handle]
        except (KeyError, TypeError):
            raise HostError(f"Invalid window id: {handle}") from None

    def _buffer(self, handle: Any) -> Buffer:
        try:
            return self._buffers[handle]
        except (KeyError, TypeError):
            raise HostError(f"Invalid buffer id: {handle}") from None

    def _enter(self, handle: int) -> None:
        if handle != self._current:
            self._previous = self._current
            self._current = handle
        self.events.publish(WindowEntered(
            window=handle, buffer=self._windows[handle].buffer,
        ))

    def _deliver(self, callback: Callable[..., None], *args: Any) -> None:
        """Run a process callback on the host's thread.

        This base version runs it inline, which is only correct when the
        spawner calls back on the thread that owns the layout (as the
        test doubles do). Spawners with reader threads, such as
        ``spawn_pty_process``, need a subclass that marshals the call;
        see ``TextualWindowManager``.
        """
        callback(*args)

    def _changed(self) -> None:
        """Hook: the layout or a buffer changed."""

    def _output_appended(self, buffer: Buffer, new_lines: list[str]) -> None:
        """Hook: complete *new_lines* were appended to *buffer*."""

    # ── Windows ─────────────────────────────────────────────────

    def list_windows(self) -> list[int]:
        return list(self._order)

    def is_window_valid(self, window: Any) -> bool:
        return window in self._windows

    def focus_window(self, window: Any) -> bool:
        if window not in self._windows:
            return False
        self._enter(window)
        self._changed()
        return True

    def current_window(self) -> int:
        return self._current

    def previous_window(self) -> int | None:
        return self._previous if self._previous in self._windows else None

    def focus_previous_window(self) -> None:
        previous = self.previous_window()
        if previous is not None:
            self.focus_window(previous)

    def split(self, direction: SplitDirection, size: int | None = None) -> int:
        """Split the current window; the new one shows the same buffer
        and takes focus."""
        current = self._windows[self._current]
        window = self._new_window(current.buffer, region=current.region)
        if direction == SplitDirection.HORIZONTAL:
            window.height = size
        else:
            window.height = current.height
        self._order.insert(self._order.index(current.handle) + 1, window.handle)
        self._enter(window.handle)
        self._changed()
        return window.handle

    def move_window_to_bottom(self, window: Any) -> None:
        target = self._window(window)
        self._order.remove(target.handle)
        self._order.append(target.handle)
        target.region = BOTTOM_REGION
        self._changed()

    def resize_window(self, window: Any, size: int) -> None:
        self._window(window).height = size
        self._changed()

    def set_window_fixed_height(self, window: Any, fixed: bool = True) -> None:
        self._window(window).fixed_height = fixed

    def window_height(self, window: Any) -> int | None:
        return self._window(window).height

    def window_region(self, window: Any) -> str:
        return self._window(window).region

    def hide_window(self, window: Any) -> None:
        target = self._window(window)
        if len(self._order) == 1:
            raise HostError("Cannot close last window")
        self._order.remove(target.handle)
        del self._windows[target.handle]
        if self._previous == target.handle:
            self._previous = None
        if self._current == target.handle:
            fallback = self.previous_window() or self._order[-1]
            self._current = fallback
            self._previous = None
            self._enter(fallback)
        self._changed()

    def get_window_buffer(self, window: Any) -> int:
        return self._window(window).buffer

    def set_window_buffer(self, window: Any, buffer: Any) -> None:
        target = self._window(window)
        target.buffer = self._buffer(buffer).handle
        if target.handle == self._current:
            self._enter(target.handle)
        self._changed()

    def switch_to_alternate_buffer(self, window: Any) -> None:
        """Show the next listed buffer (a fresh one if there is none)."""
        target = self._window(window)
        listed = [
            b.handle for b in self._buffers.values()
            if b.listed and b.handle != target.buffer
        ]
        if listed:
            later = [h for h in listed if h > target.buffer]
            replacement = later[0] if later else listed[0]
        else:
            replacement = self._new_buffer(listed=True).handle
        target.buffer = replacement
        self._changed()

    def scroll_to_end(self, window: Any) -> None:
        target = self._window(window)
        target.cursor_line = len(self._buffers[target.buffer].lines)
        self._changed()

    # ── Buffers ─────────────────────────────────────────────────

    def create_buffer(self, listed: bool = False) -> int:
        return self._new_buffer(listed=listed).handle

    def current_buffer(self) -> int:
        return self._windows[self._current].buffer

    def buffer_exists(self, buffer: Any) -> bool:
        return buffer in self._buffers

    def buffer_name(self, buffer: Any) -> str:
        return self._buffer(buffer).name

    def set_buffer_name(self, buffer: Any, name: str) -> None:
        self._buffer(buffer).name = name
        self._changed()

    def buffer_content_type(self, buffer: Any) -> str:
        return self._buffer(buffer).content_type

    def set_buffer_content_type(self, buffer: Any, content_type: str) -> None:
        self._buffer(buffer).content_type = content_type
        self._changed()

    def buffer_listed(self, buffer: Any) -> bool:
        return self._buffer(buffer).listed

    def set_buffer_listed(self, buffer: Any, listed: bool) -> None:
        self._buffer(buffer).listed = listed

    def set_buffer_directory(self, buffer: Any, path: str) -> None:
        self._buffer(buffer).directory = path

    def buffer_directory(self, buffer: Any) -> str | None:
        return self._buffer(buffer).directory

    def set_buffer_variable(self, buffer: Any, key: str, value: Any) -> None:
        self._buffer(buffer).variables[key] = value

    def get_buffer_variable(self, buffer: Any, key: str, default: Any = None) -> Any:
        return self._buffer(buffer).variables.get(key, default)

    def buffer_lines(self, buffer: Any) -> list[str]:
        return list(self._buffer(buffer).lines)

    def buffer_process(self, buffer: Any) -> Any:
        return self._buffer(buffer).process

    def process_exited(self, buffer: Any) -> bool:
        return self._buffer(buffer).exited

    def windows_for_buffer(self, buffer: Any) -> list[int]:
        return [h for h in self._order if self._windows[h].buffer == buffer]

    def wipe_buffer(self, buffer: Any) -> None:
        """Delete *buffer*, closing its windows and terminating its process."""
        target = self._buffer(buffer)
        for window in self.windows_for_buffer(target.handle):
            if len(self._order) > 1:
                self.hide_window(window)
            else:
                self.switch_to_alternate_buffer(window)
        if target.process is not None and not target.exited:
            target.process.terminate()
        del self._buffers[target.handle]
        self._changed()

    # ── Processes ───────────────────────────────────────────────

    def spawn_process(self, buffer: Any, command: str) -> Any:
        """Start *command* in *buffer*; the buffer takes the process's name."""
        target = self._buffer(buffer)
        if self._spawner is None:
            raise HostError("No process spawner configured")
        if target.process is not None and not target.exited:
            raise HostError(f"Buffer {buffer} already has a running process")
        cwd = target.directory or self.getcwd()
        handle = target.handle
        process = self._spawner(
            command,
            cwd,
            lambda text: self._deliver(self._append_output, handle, text),
            lambda code: self._deliver(self._process_exited, handle, code),
        )
        target.process = process
        target.exited = False
        target.name = f"term://{cwd}//{process.pid}:{command}"
        logger.debug("Spawned pid=%s in buffer %s: %s", process.pid, handle, command)
        windows = self.windows_for_buffer(handle)
        self.events.publish(ProcessStarted(
            buffer=handle,
            window=windows[0] if windows else None,
            process=process,
            name=target.name,
        ))
        self._changed()
        return process

    def send_input(self, process: Any, data: str) -> None:
        if process is None:
            raise HostError("Invalid channel: process is not running")
        process.write(data)

    def on_process_exit(self, buffer: Any, callback: Callable[[], None]) -> None:
        self._buffer(buffer).exit_hooks.append(callback)

    def _append_output(self, buffer: int, text: str) -> None:
        target = self._buffers.get(buffer)
        if target is None:
            return
        parts = (target.partial + text).split("\n")
        target.partial = parts.pop()
        new_lines = [part.rstrip("\r") for part in parts]
        target.lines.extend(new_lines)
        if len(target.lines) > MAX_BUFFER_LINES:
            del target.lines[: len(target.lines) - MAX_BUFFER_LINES]
        self._output_appended(target, new_lines)

    def _process_exited(self, buffer: int, exit_code: int | None) -> None:
        target = self._buffers.get(buffer)
        if target is None:
            return
        target.exited = True
        if target.partial:
            target.lines.append(target.partial)
            target.partial = ""
        target.lines.append(f"[Process exited {exit_code if exit_code is not None else '?'}]")
        logger.debug("Process in buffer %s exited with %s", buffer, exit_code)
        hooks, target.exit_hooks = target.exit_hooks, []
        for hook in hooks:
            hook()
        self.events.publish(ProcessTerminated(buffer=buffer, exit_code=exit_code))
        self._changed()

    def terminate_all(self) -> None:
        """Terminate every running process (host shutdown)."""
        for buffer in self._buffers.values():
            if buffer.process is not None and not buffer.exited:
                buffer.process.terminate()

    # ── Input and feedback ──────────────────────────────────────

    def set_buffer_keymap(self, buffer: Any, key: str, callback: KeymapCallback) -> None:
        self._buffer(buffer).keymaps[key] = callback

    def set_global_keymap(self, key: str, callback: KeymapCallback) -> None:
        self._global_keymaps[key] = callback

    def clear_global_keymap(self, key: str) -> None:
        self._global_keymaps.pop(key, None)

    def keymap_for(self, key: str, buffer: Any = None) -> KeymapCallback | None:
        """Buffer-local mappings shadow global ones."""
        if buffer in self._buffers:
            local = self._buffers[buffer].keymaps.get(key)
            if local is not None:
                return local
        return self._global_keymaps.get(key)

    def stop_insert(self) -> None:
        self.insert_mode = False

    def notify_error(self, message: str) -> None:
        self.errors.append(message)
        logger.warning("%s", message)

    def getcwd(self) -> str:
        return self._cwd or os.getcwd()
