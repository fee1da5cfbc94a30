"""Tests for opening, closing, deleting and exec'ing terminal sessions."""

from __future__ import annotations

import pytest

from termtoggle.engine.errors import InvalidArgumentError, ProcessSpawnError
from termtoggle.engine.host import SplitDirection
from termtoggle.engine.models import DEFAULT_SIZE, TERMINAL_CONTENT_TYPE
from termtoggle.host.layout import BOTTOM_REGION, FIRST_BUFFER, FIRST_WINDOW


class TestOpen:
    def test_first_open_spawns_at_bottom(self, context, host, spawner, tmp_path) -> None:
        session = context.open(1)

        assert host.list_windows() == [FIRST_WINDOW, session.window]
        assert host.window_region(session.window) == BOTTOM_REGION
        assert host.window_height(session.window) == DEFAULT_SIZE
        assert host.get_window_buffer(session.window) == session.buffer
        assert session.process is spawner.processes[0]
        assert spawner.processes[0].command == "/bin/bash;#terminal#1"
        assert session.working_directory == str(tmp_path)

    def test_terminal_buffer_options(self, context, host) -> None:
        session = context.open(2)
        assert host.buffer_content_type(session.buffer) == TERMINAL_CONTENT_TYPE
        assert not host.buffer_listed(session.buffer)
        assert host.get_buffer_variable(session.buffer, "toggle_number") == 2
        assert host.buffer_directory(session.buffer) == host.getcwd()

    def test_explicit_size(self, context, host) -> None:
        session = context.open(1, 20)
        assert host.window_height(session.window) == 20

    def test_non_positive_size_uses_default(self, context, host) -> None:
        session = context.open(1, 0)
        assert host.window_height(session.window) == DEFAULT_SIZE

    def test_sparse_numbering(self, context) -> None:
        context.open(3)
        assert context.registry.numbers() == [3]
        assert context.registry.get(1) is None

    def test_second_terminal_opens_beside_first(self, context, host) -> None:
        first = context.open(1)
        second = context.open(2)
        assert host.list_windows() == [FIRST_WINDOW, first.window, second.window]
        assert host.window_region(second.window) == BOTTOM_REGION

    def test_reopen_preserves_identity(self, context, host, spawner) -> None:
        session = context.open(1)
        buffer, process = session.buffer, session.process
        context.close(1)

        reopened = context.open(1)
        assert reopened is session
        assert reopened.buffer == buffer
        assert reopened.process is process
        assert host.get_window_buffer(reopened.window) == buffer
        assert len(spawner.processes) == 1

    def test_reopen_after_buffer_wiped_spawns_fresh_shell(self, context, host, spawner) -> None:
        session = context.open(1)
        old_buffer = session.buffer
        context.close(1)
        host.wipe_buffer(old_buffer)

        reopened = context.open(1)
        assert reopened is session
        assert reopened.buffer != old_buffer
        assert reopened.process is spawner.processes[1]
        assert spawner.processes[0].terminated

    def test_open_while_visible_adds_another_window(self, context, host) -> None:
        session = context.open(1)
        first_window = session.window
        context.open(1)
        assert session.window != first_window
        assert host.windows_for_buffer(session.buffer) == [first_window, session.window]

    @pytest.mark.parametrize("number", [0, -1, "1", 1.0, None])
    def test_invalid_number_changes_nothing(self, context, host, number) -> None:
        with pytest.raises(InvalidArgumentError):
            context.open(number)
        assert len(context.registry) == 0
        assert host.list_windows() == [FIRST_WINDOW]

    def test_spawn_failure_leaves_session_unbound(self, context, spawner) -> None:
        spawner.fail = True
        with pytest.raises(ProcessSpawnError):
            context.open(1)
        session = context.registry.get(1)
        assert session.buffer is None and session.window is None

        spawner.fail = False
        session = context.open(1)
        assert session.process is spawner.processes[0]


class TestClose:
    def test_close_hides_window_but_keeps_shell(self, context, host) -> None:
        session = context.open(1)
        window = session.window

        assert context.close(1) is True
        assert not host.is_window_valid(window)
        assert session.window is None
        assert host.buffer_exists(session.buffer)
        assert not session.process.terminated
        assert 1 in context.registry

    def test_close_unknown_number_reports_and_creates_nothing(self, context, host) -> None:
        assert context.close(4) is False
        assert host.errors == ["Failed to close window: 4 does not exist"]
        assert 4 not in context.registry

    def test_close_hidden_session_reports(self, context, host) -> None:
        context.open(1)
        context.close(1)
        assert context.close(1) is False
        assert host.errors[-1] == "Failed to close window: 1 does not exist"

    def test_close_after_user_closed_window(self, context, host) -> None:
        session = context.open(1)
        host.hide_window(session.window)
        assert context.close(1) is False


class TestDelete:
    def test_delete_forgets_session(self, context) -> None:
        context.open(1)
        context.delete(1)
        assert 1 not in context.registry

    def test_delete_unknown_is_noop(self, context) -> None:
        context.delete(9)
        assert len(context.registry) == 0

    def test_process_exit_deletes_session(self, context, host) -> None:
        session = context.open(1)
        session.process.exit(0)
        assert 1 not in context.registry
        # The window stays, showing the exited shell.
        assert host.is_window_valid(session.window)

    def test_open_after_exit_spawns_new_shell(self, context, spawner) -> None:
        context.open(1).process.exit(0)
        session = context.open(1)
        assert session.process is spawner.processes[1]


class TestExec:
    def test_exec_opens_and_sends_command(self, context, host, spawner) -> None:
        session = context.exec("ls -la")
        assert spawner.processes[0].writes == ["clear\nls -la\n"]
        assert host.is_window_valid(session.window)
        # Focus goes back to where the user was.
        assert host.current_window() == FIRST_WINDOW
        assert host.insert_mode is False

    def test_exec_in_visible_terminal_does_not_reopen(self, context, host, spawner) -> None:
        session = context.open(2)
        window = session.window
        context.exec("make", 2)
        assert session.window == window
        assert len(host.list_windows()) == 2
        assert spawner.processes[0].writes == ["clear\nmake\n"]

    def test_exec_in_hidden_terminal_reshows_it(self, context, host, spawner) -> None:
        session = context.open(1)
        context.close(1)
        context.exec("pwd", 1)
        assert host.is_window_valid(session.window)
        assert len(spawner.processes) == 1
        assert spawner.processes[0].writes == ["clear\npwd\n"]

    def test_exec_coerces_low_numbers_to_one(self, context) -> None:
        context.exec("echo hi", 0)
        assert context.registry.numbers() == [1]

    def test_exec_rejects_empty_command(self, context) -> None:
        with pytest.raises(InvalidArgumentError):
            context.exec("   ")
        assert len(context.registry) == 0

    def test_exec_scrolls_to_end(self, context, host) -> None:
        session = context.open(1)
        session.process.emit("a\nb\nc\n")
        context.exec("true", 1)
        assert host._windows[session.window].cursor_line == 3


class TestHostEvents:
    def test_last_window_terminal_is_replaced(self, context, host) -> None:
        session = context.open(1)
        host.hide_window(FIRST_WINDOW)
        host.focus_window(session.window)

        assert session.window is None
        assert host.list_windows() == [host.current_window()]
        assert host.get_window_buffer(host.current_window()) == FIRST_BUFFER
        assert host.buffer_exists(session.buffer)

    def test_entering_terminal_among_others_is_ignored(self, context, host) -> None:
        session = context.open(1)
        host.focus_window(FIRST_WINDOW)
        host.focus_window(session.window)
        assert host.get_window_buffer(session.window) == session.buffer

    def test_externally_started_terminal_is_adopted(self, context, host) -> None:
        window = host.split(SplitDirection.HORIZONTAL, 5)
        buffer = host.create_buffer()
        host.set_window_buffer(window, buffer)
        process = host.spawn_process(buffer, "/bin/bash;#terminal#5")

        session = context.registry.get(5)
        assert session.buffer == buffer
        assert session.window == window
        assert session.process is process
        assert host.window_height(window) == DEFAULT_SIZE
        assert host.buffer_content_type(buffer) == TERMINAL_CONTENT_TYPE
        assert host.get_buffer_variable(buffer, "toggle_number") == 5

        process.exit(0)
        assert 5 not in context.registry

    def test_exit_of_replaced_buffer_keeps_session(self, context, host) -> None:
        old = context.open(1)
        old_process = old.process
        context.close(1)
        window = host.split(SplitDirection.VERTICAL)
        buffer = host.create_buffer()
        host.set_buffer_name(buffer, "bash;#terminal#1")
        host.set_window_buffer(window, buffer)
        assert context.reconcile() == [1]

        old_process.exit(0)
        assert context.registry.get(1).buffer == buffer
        assert context.lifecycle.is_visible(1)

    def test_started_process_without_marker_is_ignored(self, context, host) -> None:
        host.spawn_process(host.create_buffer(), "htop")
        assert len(context.registry) == 0

    def test_started_process_with_bad_number_is_ignored(self, context, host) -> None:
        host.spawn_process(host.create_buffer(), "bash;#terminal#abc")
        assert len(context.registry) == 0

    def test_buffer_mapping_installed(self, context, host) -> None:
        session = context.open(1)
        callback = host.keymap_for("ctrl+backslash", session.buffer)
        callback(1)
        assert not context.lifecycle.is_visible(1)


def test_exec_on_empty_registry_opens_numbered_terminal(context, host, spawner) -> None:
    session = context.exec("ls", 5, 20)
    assert context.registry.numbers() == [5]
    assert host.window_height(session.window) == 20
    assert spawner.processes[0].writes == ["clear\nls\n"]
