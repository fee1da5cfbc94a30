"""Shell processes running on a pseudo-terminal.

Handles:
- Process lifecycle (fork, exec, terminate)
- Output reading on a background thread
- Exit detection and exit-code reporting
"""
from __future__ import annotations

import logging
import os
import pty
import select
import signal
import threading
from collections.abc import Callable

from termtoggle.engine.errors import HostError, ProcessSpawnError

logger = logging.getLogger(__name__)

READ_CHUNK = 4096
POLL_SECONDS = 0.1


class PtyProcess:
    """One shell on a PTY.

    ``on_output`` and ``on_exit`` are called from the reader thread; the
    host is responsible for moving them onto its own thread.

    Attributes:
        command: Command line run through ``/bin/sh -c``
        cwd: Working directory of the child
        pid: Child process ID (None until started)
        master_fd: PTY master file descriptor (None until started)
    """

    def __init__(
        self,
        command: str,
        cwd: str,
        on_output: Callable[[str], None],
        on_exit: Callable[[int | None], None],
        env: dict[str, str] | None = None,
    ) -> None:
        self.command = command
        self.cwd = cwd
        self._on_output = on_output
        self._on_exit = on_exit
        self._env = env
        self.pid: int | None = None
        self.master_fd: int | None = None
        self.running = False
        self._reader: threading.Thread | None = None

    def start(self) -> None:
        """Fork the child and start the reader thread.

        Raises:
            ProcessSpawnError: If the PTY cannot be created
        """
        if self.running:
            raise ProcessSpawnError(self.command, "already running")
        try:
            pid, master_fd = pty.fork()
        except OSError as exc:
            raise ProcessSpawnError(self.command, str(exc)) from exc

        if pid == 0:  # Child process
            try:
                os.chdir(self.cwd)
            except OSError:
                os._exit(1)
            env = dict(os.environ if self._env is None else self._env)
            env.setdefault("TERM", "xterm-256color")
            # The ';#terminal#N' suffix of the command is a shell comment.
            os.execvpe("/bin/sh", ["/bin/sh", "-c", self.command], env)

        self.pid = pid
        self.master_fd = master_fd
        self.running = True
        self._reader = threading.Thread(
            target=self._read_loop, name=f"pty-reader-{pid}", daemon=True,
        )
        self._reader.start()
        logger.info("Started pid=%d cwd=%s: %s", pid, self.cwd, self.command)

    def _read_loop(self) -> None:
        while self.running:
            try:
                ready, _, _ = select.select([self.master_fd], [], [], POLL_SECONDS)
                if not ready:
                    continue
                data = os.read(self.master_fd, READ_CHUNK)
            except (OSError, ValueError):
                break  # EIO once the child has gone
            if not data:
                break
            self._on_output(data.decode("utf-8", errors="replace"))

        exit_code = self._reap()
        self.running = False
        self._close_fd()
        logger.info("pid=%s exited with %s", self.pid, exit_code)
        self._on_exit(exit_code)

    def _reap(self) -> int | None:
        try:
            _, status = os.waitpid(self.pid, 0)
        except ChildProcessError:
            return None
        if os.WIFEXITED(status):
            return os.WEXITSTATUS(status)
        if os.WIFSIGNALED(status):
            return 128 + os.WTERMSIG(status)
        return None

    def _close_fd(self) -> None:
        if self.master_fd is not None:
            try:
                os.close(self.master_fd)
            except OSError:
                pass  # already closed
            self.master_fd = None

    def write(self, data: str) -> None:
        if not self.running or self.master_fd is None:
            raise HostError(f"Process {self.pid} is not running")
        os.write(self.master_fd, data.encode("utf-8"))

    def terminate(self) -> None:
        """Send SIGHUP, as a terminal closing would; the reader reaps."""
        if not self.running or self.pid is None:
            return
        try:
            os.kill(self.pid, signal.SIGHUP)
        except ProcessLookupError:
            pass  # already exited


def spawn_pty_process(
    command: str,
    cwd: str,
    on_output: Callable[[str], None],
    on_exit: Callable[[int | None], None],
) -> PtyProcess:
    """Spawner for LayoutWindowManager backed by real PTYs."""
    process = PtyProcess(command, cwd, on_output, on_exit)
    process.start()
    return process
