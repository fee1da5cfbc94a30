"""Buffer naming convention linking a shell to its session number.

Terminal buffers are named ``<shell-command>;#terminal#<number>``. When
the host runs the name through a shell, everything after ``;`` is a
comment, so the suffix never reaches the process. Hosts may wrap the
name (``term://~//1234:/bin/zsh;#terminal#2``); only the segment after
the final ``#`` identifies the session.
"""
from __future__ import annotations

from .errors import NameFormatError
from .models import TERMINAL_CONTENT_TYPE

NAME_MARKER = f";#{TERMINAL_CONTENT_TYPE}#"


def format_buffer_name(shell: str, number: int) -> str:
    """Build the process identity for session *number*."""
    return f"{shell}{NAME_MARKER}{number}"


def has_name_marker(name: str) -> bool:
    return NAME_MARKER in (name or "")


def parse_session_number(name: str) -> int:
    """Return the session number encoded at the end of *name*.

    Raises NameFormatError if the trailing ``#`` segment is not a
    positive integer.
    """
    if not name or "#" not in name:
        raise NameFormatError(name or "", "no '#' separator")
    tail = name.rsplit("#", 1)[1].strip()
    # str.isdigit() also accepts superscripts and other Unicode digits.
    if not (tail.isascii() and tail.isdigit()):
        raise NameFormatError(name, f"trailing segment {tail!r} is not an integer")
    number = int(tail)
    if number < 1:
        raise NameFormatError(name, "session numbers start at 1")
    return number
