"""Adapters package - typed host events and the bus delivering them."""
from __future__ import annotations

__all__ = [
    "EventBus",
    "HostEvent",
    "ProcessStarted",
    "ProcessTerminated",
    "WindowEntered",
]

from termtoggle.adapters.event_bus import EventBus
from termtoggle.adapters.events import (
    HostEvent,
    ProcessStarted,
    ProcessTerminated,
    WindowEntered,
)
