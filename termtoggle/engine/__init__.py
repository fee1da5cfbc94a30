"""Terminal session engine: registry, toggling and reconciliation."""
from .config import TermConfig
from .context import TerminalContext
from .errors import (
    HostError,
    InvalidArgumentError,
    NameFormatError,
    ProcessSpawnError,
    TermToggleError,
)
from .host import SplitDirection, WindowManager
from .models import DEFAULT_SIZE, TERMINAL_CONTENT_TYPE, Session
from .naming import format_buffer_name, parse_session_number
from .registry import SessionRegistry

__all__ = [
    "DEFAULT_SIZE",
    "TERMINAL_CONTENT_TYPE",
    "HostError",
    "InvalidArgumentError",
    "NameFormatError",
    "ProcessSpawnError",
    "Session",
    "SessionRegistry",
    "SplitDirection",
    "TermConfig",
    "TermToggleError",
    "TerminalContext",
    "WindowManager",
    "format_buffer_name",
    "parse_session_number",
]
