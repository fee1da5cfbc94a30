"""Session registry: the authoritative number → Session mapping."""
from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import Any

from .models import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Sparse mapping from session number to Session.

    Numbers are keys, not positions: sessions 1 and 3 may exist without
    a session 2.
    """

    def __init__(self, cwd_provider: Callable[[], str] | None = None) -> None:
        self._sessions: dict[int, Session] = {}
        self._cwd_provider = cwd_provider or os.getcwd

    def get(self, number: int) -> Session | None:
        return self._sessions.get(number)

    def get_or_create(self, number: int) -> Session:
        session = self._sessions.get(number)
        if session is None:
            session = Session(number=number, working_directory=self._cwd_provider())
            self._sessions[number] = session
            logger.debug("Registered session %d (cwd=%s)", number, session.working_directory)
        return session

    def put(self, session: Session) -> None:
        """Insert or replace the entry for ``session.number``."""
        self._sessions[session.number] = session

    def delete(self, number: int) -> bool:
        """Remove *number*; returns whether an entry existed."""
        if self._sessions.pop(number, None) is None:
            return False
        logger.debug("Removed session %d", number)
        return True

    def all(self) -> list[Session]:
        return [self._sessions[n] for n in sorted(self._sessions)]

    def numbers(self) -> list[int]:
        return sorted(self._sessions)

    def find_by_buffer(self, buffer: Any) -> Session | None:
        if buffer is None:
            return None
        for session in self._sessions.values():
            if session.buffer == buffer:
                return session
        return None

    def tracked_windows(self) -> set[Any]:
        return {s.window for s in self._sessions.values() if s.window is not None}

    def clear(self) -> None:
        self._sessions.clear()

    def __contains__(self, number: object) -> bool:
        return number in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.all())
