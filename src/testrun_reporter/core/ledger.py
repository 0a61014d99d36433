"""
Error ledger: failed tests captured per session and replayed at run end.
"""

from __future__ import annotations

import traceback
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class LedgerEntry:
    """A captured test failure."""

    session_id: str
    test_id: str
    time_elapsed: float  # milliseconds
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "test_id": self.test_id,
            "time_elapsed": self.time_elapsed,
            "error": self.error,
        }


def format_error(error: Any) -> str:
    """
    Render a host error value as a message.

    Exceptions with a traceback render as the full traceback, other
    exceptions as ``Name: message``. Mappings (errors deserialised from an
    event log) prefer their ``stack`` over ``name: message``.
    """
    if isinstance(error, BaseException):
        if error.__traceback__ is not None:
            return "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ).rstrip()
        message = str(error)
        return f"{type(error).__name__}: {message}" if message else type(error).__name__
    if isinstance(error, Mapping):
        if error.get("stack"):
            return str(error["stack"])
        name = error.get("name") or "Error"
        message = error.get("message")
        return f"{name}: {message}" if message else str(name)
    return str(error)


class ErrorLedger:
    """
    Append-only, per-session record of failed tests.

    Entries are never deduplicated: a retried test that fails twice is
    recorded twice.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[LedgerEntry]] = defaultdict(list)

    def record(self, session_id: str, test_id: str, time_elapsed: float, error: Any) -> LedgerEntry:
        entry = LedgerEntry(
            session_id=session_id,
            test_id=test_id,
            time_elapsed=time_elapsed,
            error=error if isinstance(error, str) else format_error(error),
        )
        self._entries[session_id].append(entry)
        return entry

    def entries(self, session_id: str) -> list[LedgerEntry]:
        return list(self._entries.get(session_id, ()))

    def drain_all(self) -> Iterator[tuple[str, Iterator[LedgerEntry]]]:
        """
        Lazily yield ``(session_id, entries)`` for every session with failures.

        Sessions come in the order of their first failure; entries in the
        order they were recorded. The ledger itself is left untouched.
        """
        for session_id, entries in list(self._entries.items()):
            if entries:
                yield session_id, iter(list(entries))

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())
