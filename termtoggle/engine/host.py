"""Capability interface the engine requires from its host application.

The engine never touches windows, buffers or processes directly; every
side effect goes through a ``WindowManager``. Handles are opaque to the
engine: it only stores them and hands them back.
"""
from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from termtoggle.adapters.event_bus import EventBus

# Invoked with the numeric count typed before the mapping (1 if none).
KeymapCallback = Callable[[int], None]


class SplitDirection(str, Enum):
    """How a new window divides the current one."""
    HORIZONTAL = "horizontal"  # stacked, new window below
    VERTICAL = "vertical"      # side by side, new window to the right


@runtime_checkable
class WindowManager(Protocol):
    """Window, buffer and process primitives provided by the host."""

    events: EventBus
    shell: str

    # Windows
    def list_windows(self) -> list[Any]: ...
    def is_window_valid(self, window: Any) -> bool: ...
    def focus_window(self, window: Any) -> bool: ...
    def current_window(self) -> Any: ...
    def focus_previous_window(self) -> None: ...
    def split(self, direction: SplitDirection, size: int | None = None) -> Any: ...
    def move_window_to_bottom(self, window: Any) -> None: ...
    def resize_window(self, window: Any, size: int) -> None: ...
    def set_window_fixed_height(self, window: Any, fixed: bool = True) -> None: ...
    def hide_window(self, window: Any) -> None: ...
    def get_window_buffer(self, window: Any) -> Any: ...
    def set_window_buffer(self, window: Any, buffer: Any) -> None: ...
    def switch_to_alternate_buffer(self, window: Any) -> None: ...
    def scroll_to_end(self, window: Any) -> None: ...

    # Buffers
    def create_buffer(self, listed: bool = False) -> Any: ...
    def current_buffer(self) -> Any: ...
    def buffer_exists(self, buffer: Any) -> bool: ...
    def buffer_name(self, buffer: Any) -> str: ...
    def buffer_content_type(self, buffer: Any) -> str: ...
    def set_buffer_content_type(self, buffer: Any, content_type: str) -> None: ...
    def set_buffer_listed(self, buffer: Any, listed: bool) -> None: ...
    def set_buffer_directory(self, buffer: Any, path: str) -> None: ...
    def set_buffer_variable(self, buffer: Any, key: str, value: Any) -> None: ...
    def buffer_process(self, buffer: Any) -> Any: ...
    def windows_for_buffer(self, buffer: Any) -> list[Any]: ...

    # Processes
    def spawn_process(self, buffer: Any, command: str) -> Any: ...
    def send_input(self, process: Any, data: str) -> None: ...
    def on_process_exit(self, buffer: Any, callback: Callable[[], None]) -> None: ...

    # Input and feedback
    def set_buffer_keymap(self, buffer: Any, key: str, callback: KeymapCallback) -> None: ...
    def set_global_keymap(self, key: str, callback: KeymapCallback) -> None: ...
    def clear_global_keymap(self, key: str) -> None: ...
    def stop_insert(self) -> None: ...
    def notify_error(self, message: str) -> None: ...
    def getcwd(self) -> str: ...
