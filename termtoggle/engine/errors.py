"""Exception hierarchy for the terminal session engine.

Specific exceptions for each failure mode. User-facing failures that
are not exceptional (closing a hidden session) are reported through the
host instead of raised.
"""
from __future__ import annotations


class TermToggleError(Exception):
    """Base exception for all terminal session errors."""


class InvalidArgumentError(TermToggleError, ValueError):
    """An operation argument failed validation before any state changed."""
    def __init__(self, name: str, value: object, expected: str):
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid {name}: {value!r} (expected {expected})"
        )


class NameFormatError(TermToggleError):
    """A buffer name does not carry a parsable session number."""
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot parse session number from {name!r}: {reason}")


class HostError(TermToggleError):
    """The host rejected a window or buffer operation."""


class ProcessSpawnError(HostError):
    """Failed to start a shell process for a terminal buffer."""
    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to spawn {command!r}: {reason}")
