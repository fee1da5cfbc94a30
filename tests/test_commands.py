"""Tests for slash-command parsing and the command handler."""

from __future__ import annotations

import pytest

from termtoggle.engine.errors import InvalidArgumentError
from termtoggle.shared.commands import (
    COMMAND_HELP,
    parse_command,
    parse_int_arg,
    split_exec_args,
)
from termtoggle.tui.handlers.command_handler import CommandHandler


class TestParseCommand:
    def test_requires_leading_slash(self) -> None:
        assert parse_command("toggle") is None
        assert parse_command("") is None

    def test_splits_name_and_args(self) -> None:
        cmd = parse_command("  /open 3 20 ")
        assert cmd.name == "open"
        assert cmd.args == ["3", "20"]
        assert cmd.raw == "/open 3 20"

    def test_no_args(self) -> None:
        assert parse_command("/sessions").args == []

    def test_parse_int_arg(self) -> None:
        assert parse_int_arg("7", "number") == 7
        with pytest.raises(InvalidArgumentError):
            parse_int_arg("seven", "number")

    @pytest.mark.parametrize("args, expected", [
        (["ls"], (1, "ls")),
        (["2", "make", "test"], (2, "make test")),
        (["42"], (1, "42")),
        (["git", "status"], (1, "git status")),
    ])
    def test_split_exec_args(self, args, expected) -> None:
        assert split_exec_args(args) == expected

    def test_help_lists_every_command(self) -> None:
        assert set(COMMAND_HELP) == {
            "toggle", "open", "close", "delete", "exec", "reconcile", "sessions", "help",
        }


class TestCommandHandler:
    @pytest.fixture
    def output(self):
        return []

    @pytest.fixture
    def handler(self, context, output):
        return CommandHandler(context, output.append)

    def test_unknown_command(self, handler, output) -> None:
        assert handler.handle(parse_command("/frobnicate")) is False
        assert "Unknown command" in output[-1]

    def test_open_and_sessions(self, handler, context, output) -> None:
        assert handler.handle(parse_command("/open 2 18")) is True
        assert "Opened terminal 2" in output[-1]
        assert context.lifecycle.is_visible(2)

        handler.handle(parse_command("/sessions"))
        assert any("visible" in line for line in output)

    def test_toggle_with_count(self, handler, context) -> None:
        handler.handle(parse_command("/toggle 3"))
        assert context.lifecycle.is_visible(3)
        handler.handle(parse_command("/toggle 3"))
        assert not context.lifecycle.is_visible(3)

    def test_smart_toggle(self, handler, context) -> None:
        handler.handle(parse_command("/toggle"))
        assert context.lifecycle.is_visible(1)

    def test_close(self, handler, context, host) -> None:
        handler.handle(parse_command("/open 1"))
        assert handler.handle(parse_command("/close 1")) is True
        assert handler.handle(parse_command("/close 1")) is False
        assert host.errors[-1] == "Failed to close window: 1 does not exist"

    def test_delete(self, handler, context, output) -> None:
        handler.handle(parse_command("/open 1"))
        handler.handle(parse_command("/delete 1"))
        assert 1 not in context.registry
        assert "Forgot terminal 1" in output[-1]

    def test_exec(self, handler, spawner) -> None:
        assert handler.handle(parse_command("/exec 2 echo hi")) is True
        assert spawner.processes[0].writes == ["clear\necho hi\n"]
        assert spawner.processes[0].command.endswith(";#terminal#2")

    def test_reconcile_reports(self, handler, output) -> None:
        handler.handle(parse_command("/reconcile"))
        assert "Nothing to reconcile" in output[-1]

    def test_bad_number_is_reported(self, handler, context, output) -> None:
        assert handler.handle(parse_command("/open two")) is False
        assert output[-1].startswith("[red]Error:[/red]")
        assert len(context.registry) == 0

    def test_missing_argument_shows_usage(self, handler, output) -> None:
        assert handler.handle(parse_command("/open")) is False
        assert "Usage" in output[-1]

    def test_help(self, handler, output) -> None:
        handler.handle(parse_command("/help"))
        assert len(output) == len(COMMAND_HELP) + 1
