"""Slash command parser and help table."""

from __future__ import annotations

from dataclasses import dataclass

from termtoggle.engine.errors import InvalidArgumentError


@dataclass
class ParsedCommand:
    """A parsed slash command."""

    name: str
    args: list[str]
    raw: str


def parse_command(text: str) -> ParsedCommand | None:
    """Parse a /command from input text.

    Returns None if text does not start with '/'.
    """
    stripped = text.strip()
    if not stripped.startswith("/"):
        return None
    parts = stripped.split()
    name = parts[0][1:]  # remove leading '/'
    args = parts[1:] if len(parts) > 1 else []
    return ParsedCommand(name=name, args=args, raw=stripped)


def parse_int_arg(value: str, name: str) -> int:
    """Parse a numeric command argument."""
    try:
        return int(value)
    except ValueError:
        raise InvalidArgumentError(name, value, "an integer") from None


def split_exec_args(args: list[str]) -> tuple[int, str]:
    """``/exec [N] CMD...`` → (number, command).

    A leading integer is the terminal number only when a command
    follows it; ``/exec 42`` runs ``42`` in terminal 1.
    """
    if len(args) > 1 and args[0].lstrip("-").isdigit():
        return int(args[0]), " ".join(args[1:])
    return 1, " ".join(args)


COMMAND_HELP: dict[str, str] = {
    "toggle": "/toggle [COUNT] [SIZE]: toggle terminal COUNT, or the smart toggle without one",
    "open": "/open N [SIZE]: open or re-show terminal N",
    "close": "/close N: hide terminal N (the shell keeps running)",
    "delete": "/delete N: forget terminal N",
    "exec": "/exec [N] CMD: clear terminal N (default 1) and run CMD in it",
    "reconcile": "Re-register terminal windows the session list lost track of",
    "sessions": "List all terminal sessions",
    "help": "Show this help message",
}
