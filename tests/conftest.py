"""Shared fixtures: an in-memory host with scripted shell processes."""

from __future__ import annotations

import pytest

from termtoggle.engine.config import TermConfig
from termtoggle.engine.context import TerminalContext
from termtoggle.engine.errors import HostError, ProcessSpawnError
from termtoggle.host.layout import LayoutWindowManager

SHELL = "/bin/bash"


class FakeProcess:
    """Stands in for a PTY shell; records input and exits on demand."""

    def __init__(self, pid, command, cwd, on_output, on_exit):
        self.pid = pid
        self.command = command
        self.cwd = cwd
        self._on_output = on_output
        self._on_exit = on_exit
        self.writes: list[str] = []
        self.terminated = False
        self.exited = False

    def write(self, data: str) -> None:
        if self.exited:
            raise HostError(f"Process {self.pid} is not running")
        self.writes.append(data)

    def terminate(self) -> None:
        self.terminated = True

    def emit(self, text: str) -> None:
        self._on_output(text)

    def exit(self, code: int | None = 0) -> None:
        self.exited = True
        self._on_exit(code)


class FakeSpawner:
    """Spawner callable handing out FakeProcess objects."""

    def __init__(self) -> None:
        self.processes: list[FakeProcess] = []
        self.fail = False
        self._next_pid = 4000

    def __call__(self, command, cwd, on_output, on_exit):
        if self.fail:
            raise ProcessSpawnError(command, "fork failed")
        self._next_pid += 1
        process = FakeProcess(self._next_pid, command, cwd, on_output, on_exit)
        self.processes.append(process)
        return process


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def host(spawner, tmp_path):
    return LayoutWindowManager(spawner=spawner, shell=SHELL, cwd=str(tmp_path))


@pytest.fixture
def config():
    return TermConfig(shell=SHELL)


@pytest.fixture
def context(host, config):
    ctx = TerminalContext(host, config)
    ctx.init()
    yield ctx
    ctx.teardown()
