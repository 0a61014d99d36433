"""
Session registry: execution-session id -> root suite and coverage flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from testrun_reporter.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class Session:
    """One environment/platform instance executing a root suite."""

    session_id: str
    suite: Any
    coverage: bool = False
    state: SessionState = SessionState.ACTIVE


class SessionRegistry:
    """
    Maps session ids to their root suites.

    Sessions are created lazily on root-suite start and live for the rest of
    the process. Registering the same id again replaces the previous entry.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def register_root(self, session_id: str, suite: Any) -> Session:
        if session_id in self._sessions:
            logger.debug("Re-registering session %r", session_id)
        session = Session(session_id=session_id, suite=suite)
        self._sessions[session_id] = session
        if session_id:
            logger.info("Created session %s (%s)", getattr(suite, "name", ""), session_id)
        return session

    def get(self, session_id: str) -> Session:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id, known=list(self._sessions)) from None

    def complete(self, session_id: str) -> Session:
        """Mark a session's root suite as finished."""
        session = self.get(session_id)
        session.state = SessionState.COMPLETED
        return session

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))

    def __len__(self) -> int:
        return len(self._sessions)
