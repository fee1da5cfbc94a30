"""Argument validation for terminal operations.

Every check runs before any state is touched, so a rejected call leaves
the registry and the host exactly as they were.
"""
from __future__ import annotations

from .errors import InvalidArgumentError
from .models import DEFAULT_SIZE


def _is_int(value: object) -> bool:
    # bool is an int subclass; True is not a session number.
    return isinstance(value, int) and not isinstance(value, bool)


def validate_number(value: object, name: str = "number") -> int:
    """Session numbers are positive integers."""
    if not _is_int(value) or value < 1:
        raise InvalidArgumentError(name, value, "a positive integer")
    return value


def validate_count(value: object) -> int:
    """Toggle counts are non-negative; ``None`` means no count (1)."""
    if value is None:
        return 1
    if not _is_int(value) or value < 0:
        raise InvalidArgumentError("count", value, "a non-negative integer")
    return value


def validate_size(value: object) -> int | None:
    """Sizes are integers or ``None``; non-positive values fall back later."""
    if value is not None and not _is_int(value):
        raise InvalidArgumentError("size", value, "an integer")
    return value


def resolve_size(value: object, default: int = DEFAULT_SIZE) -> int:
    """Return *value* if it is a positive size, else *default*."""
    value = validate_size(value)
    if value is None:
        return default
    return value if value > 0 else default


def validate_command(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError("cmd", value, "a non-empty string")
    return value


def coerce_number(value: object) -> int:
    """Like validate_number, but numbers below 1 become 1."""
    if not _is_int(value):
        raise InvalidArgumentError("number", value, "an integer")
    return max(value, 1)
