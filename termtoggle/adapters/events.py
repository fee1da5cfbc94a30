"""Event types delivered by the host to the terminal engine.

Each event is a typed dataclass carrying host handles, so subscribers
never have to parse command strings or buffer names to find out what
happened.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class HostEvent:
    """Base event from the host."""
    event_type: str = ""


@dataclass
class WindowEntered(HostEvent):
    event_type: str = "window_entered"
    window: Any = None
    buffer: Any = None


@dataclass
class ProcessStarted(HostEvent):
    event_type: str = "process_started"
    buffer: Any = None
    window: Any = None
    process: Any = None
    name: str = ""


@dataclass
class ProcessTerminated(HostEvent):
    event_type: str = "process_terminated"
    buffer: Any = None
    exit_code: int | None = None
