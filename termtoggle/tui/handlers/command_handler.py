"""Slash-command handler extracted from MainScreen.

Translates /commands into TerminalContext calls and reports the outcome
through a log writer, keeping MainScreen focused on layout and keys.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.markup import escape

from termtoggle.engine.context import TerminalContext
from termtoggle.engine.errors import TermToggleError
from termtoggle.shared.commands import (
    COMMAND_HELP,
    ParsedCommand,
    parse_int_arg,
    split_exec_args,
)

logger = logging.getLogger(__name__)


class CommandHandler:
    """Processes slash commands against a terminal context.

    ``write`` receives Rich-markup status lines (the screen passes its
    tool log's ``write``).
    """

    def __init__(self, context: TerminalContext, write: Callable[[str], object]) -> None:
        self._context = context
        self._write = write

    # ── public entry point ──────────────────────────────────────────

    def handle(self, command: ParsedCommand) -> bool:
        """Dispatch a parsed command.  Returns True if it succeeded."""
        name = command.name.lower()
        args = command.args

        dispatch = {
            "help": lambda: self._cmd_help(),
            "toggle": lambda: self._cmd_toggle(args),
            "open": lambda: self._cmd_open(args),
            "close": lambda: self._cmd_close(args),
            "delete": lambda: self._cmd_delete(args),
            "exec": lambda: self._cmd_exec(args),
            "reconcile": lambda: self._cmd_reconcile(),
            "sessions": lambda: self._cmd_sessions(),
        }

        handler = dispatch.get(name)
        if handler is None:
            self._write(
                f"[red]Unknown command:[/red] /{name}. "
                "Type /help for available commands."
            )
            return False
        try:
            return handler() is not False
        except TermToggleError as exc:
            logger.info("Command %s failed: %s", command.raw, exc)
            self._write(f"[red]Error:[/red] {exc}")
            return False

    # ── individual commands ─────────────────────────────────────────

    def _cmd_help(self) -> None:
        self._write("[bold]Available commands:[/bold]")
        for cmd, desc in COMMAND_HELP.items():
            self._write(f"  [cyan]/{cmd}[/cyan] -- {escape(desc)}")

    def _cmd_toggle(self, args: list[str]) -> None:
        count = parse_int_arg(args[0], "count") if args else 1
        size = parse_int_arg(args[1], "size") if len(args) > 1 else None
        self._context.toggle(count, size)

    def _cmd_open(self, args: list[str]) -> bool:
        if not args:
            self._write("[red]Usage:[/red] /open N \\[SIZE]")
            return False
        number = parse_int_arg(args[0], "number")
        size = parse_int_arg(args[1], "size") if len(args) > 1 else None
        self._context.open(number, size)
        self._write(f"[green]Opened terminal {number}[/green]")
        return True

    def _cmd_close(self, args: list[str]) -> bool:
        if not args:
            self._write("[red]Usage:[/red] /close N")
            return False
        return self._context.close(parse_int_arg(args[0], "number"))

    def _cmd_delete(self, args: list[str]) -> bool:
        if not args:
            self._write("[red]Usage:[/red] /delete N")
            return False
        number = parse_int_arg(args[0], "number")
        self._context.delete(number)
        self._write(f"[dim]Forgot terminal {number}[/dim]")
        return True

    def _cmd_exec(self, args: list[str]) -> bool:
        if not args:
            self._write("[red]Usage:[/red] /exec \\[N] CMD")
            return False
        number, cmd = split_exec_args(args)
        self._context.exec(cmd, number)
        return True

    def _cmd_reconcile(self) -> None:
        recovered = self._context.reconcile()
        if recovered:
            self._write(
                f"[green]Recovered terminals:[/green] {', '.join(map(str, recovered))}"
            )
        else:
            self._write("[dim]Nothing to reconcile[/dim]")

    def _cmd_sessions(self) -> None:
        sessions = self._context.introspect()
        if not sessions:
            self._write("[dim]No terminal sessions.[/dim]")
            return
        self._write(f"[bold]Terminal sessions ({len(sessions)}):[/bold]")
        for entry in sessions:
            state = "[green]visible[/green]" if entry["visible"] else "[dim]hidden[/dim]"
            self._write(
                f"  [cyan]{entry['number']}[/cyan] {state} "
                f"pid={entry['process']} cwd={entry['working_directory']}"
            )
