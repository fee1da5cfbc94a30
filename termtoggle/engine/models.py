"""Data model for terminal sessions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Content type the host reports for terminal buffers owned by this engine.
TERMINAL_CONTENT_TYPE = "terminal"

# Used when neither the caller nor the config supplies a usable size.
DEFAULT_SIZE = 12


@dataclass
class Session:
    """A numbered terminal tracked across hide/show cycles.

    Handles are opaque host references; ``None`` means unbound. A bound
    ``window`` is only a hint: liveness must be re-checked through the
    window locator before acting on it.
    """

    number: int
    working_directory: str
    window: Any = None
    buffer: Any = None
    process: Any = None

    @property
    def has_buffer(self) -> bool:
        return self.buffer is not None

    def unbind(self) -> None:
        """Drop every handle, e.g. after the process has exited."""
        self.window = None
        self.buffer = None
        self.process = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "window": self.window,
            "buffer": self.buffer,
            "process": getattr(self.process, "pid", self.process),
            "working_directory": self.working_directory,
        }
