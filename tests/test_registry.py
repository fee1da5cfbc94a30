"""Tests for the session registry, model and argument validation."""

from __future__ import annotations

import pytest

from termtoggle.engine.errors import InvalidArgumentError
from termtoggle.engine.models import Session
from termtoggle.engine.registry import SessionRegistry
from termtoggle.engine.validation import (
    coerce_number,
    resolve_size,
    validate_command,
    validate_count,
    validate_number,
)


def _registry() -> SessionRegistry:
    return SessionRegistry(cwd_provider=lambda: "/work")


class TestSessionRegistry:
    def test_get_never_inserts(self) -> None:
        registry = _registry()
        assert registry.get(5) is None
        assert 5 not in registry
        assert len(registry) == 0

    def test_get_or_create_inserts_unbound_session(self) -> None:
        registry = _registry()
        session = registry.get_or_create(2)
        assert session.number == 2
        assert session.working_directory == "/work"
        assert session.window is None and session.buffer is None and session.process is None
        assert registry.get_or_create(2) is session

    def test_numbering_is_sparse(self) -> None:
        registry = _registry()
        registry.get_or_create(3)
        registry.get_or_create(1)
        assert registry.numbers() == [1, 3]
        assert 2 not in registry
        assert [s.number for s in registry] == [1, 3]

    def test_delete_reports_whether_entry_existed(self) -> None:
        registry = _registry()
        registry.get_or_create(1)
        assert registry.delete(1) is True
        assert registry.delete(1) is False

    def test_put_replaces_entry(self) -> None:
        registry = _registry()
        registry.get_or_create(1)
        replacement = Session(number=1, working_directory="/elsewhere", window=1001)
        registry.put(replacement)
        assert registry.get(1) is replacement

    def test_find_by_buffer_and_tracked_windows(self) -> None:
        registry = _registry()
        registry.put(Session(number=1, working_directory="/", window=1001, buffer=2))
        registry.put(Session(number=2, working_directory="/", buffer=3))
        assert registry.find_by_buffer(3).number == 2
        assert registry.find_by_buffer(None) is None
        assert registry.tracked_windows() == {1001}

    def test_clear(self) -> None:
        registry = _registry()
        registry.get_or_create(1)
        registry.clear()
        assert len(registry) == 0


class TestSession:
    def test_to_dict_reports_process_pid(self) -> None:
        class Proc:
            pid = 77

        session = Session(number=1, working_directory="/w", window=1001, buffer=2, process=Proc())
        assert session.to_dict() == {
            "number": 1,
            "window": 1001,
            "buffer": 2,
            "process": 77,
            "working_directory": "/w",
        }

    def test_unbind(self) -> None:
        session = Session(number=1, working_directory="/", window=1, buffer=2, process=3)
        assert session.has_buffer
        session.unbind()
        assert not session.has_buffer
        assert session.window is None and session.process is None


class TestValidation:
    @pytest.mark.parametrize("value", [0, -1, 1.5, "1", None, True])
    def test_validate_number_rejects(self, value) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_number(value)

    def test_validate_number_accepts_positive(self) -> None:
        assert validate_number(4) == 4

    def test_validate_count(self) -> None:
        assert validate_count(None) == 1
        assert validate_count(0) == 0
        assert validate_count(3) == 3
        with pytest.raises(InvalidArgumentError):
            validate_count(-2)
        with pytest.raises(InvalidArgumentError):
            validate_count("2")

    def test_resolve_size_falls_back_to_default(self) -> None:
        assert resolve_size(None, 12) == 12
        assert resolve_size(0, 12) == 12
        assert resolve_size(-5, 12) == 12
        assert resolve_size(20, 12) == 20
        with pytest.raises(InvalidArgumentError):
            resolve_size("big", 12)

    def test_validate_command(self) -> None:
        assert validate_command("ls -la") == "ls -la"
        for bad in ("", "   ", None, 5):
            with pytest.raises(InvalidArgumentError):
                validate_command(bad)

    def test_coerce_number_clamps_to_one(self) -> None:
        assert coerce_number(0) == 1
        assert coerce_number(-3) == 1
        assert coerce_number(2) == 2
        with pytest.raises(InvalidArgumentError):
            coerce_number("2")

    def test_invalid_argument_error_is_value_error(self) -> None:
        with pytest.raises(ValueError) as info:
            validate_number(0)
        assert info.value.name == "number"
        assert info.value.value == 0
