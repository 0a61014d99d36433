"""
Event types delivered by the host test engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from testrun_reporter.models.run import Suite, Test


class EventType(str, Enum):
    """Lifecycle events emitted by the host during a test run."""
    # Suite lifecycle
    SUITE_START = "suite_start"
    SUITE_END = "suite_end"
    SUITE_ERROR = "suite_error"

    # Test outcomes
    TEST_PASS = "test_pass"
    TEST_FAIL = "test_fail"
    TEST_SKIP = "test_skip"

    # Coverage delivery
    COVERAGE = "coverage"

    # Run lifecycle
    FATAL_ERROR = "fatal_error"
    RUN_END = "run_end"


@dataclass
class ReporterEvent:
    """
    A single host event.

    Only the payload fields relevant to the event type are set: ``suite``
    for suite events, ``test`` for test outcomes, ``session_id`` and
    ``coverage`` for coverage delivery, ``error`` for fatal errors.
    """
    type: EventType
    suite: Suite | None = None
    test: Test | None = None
    session_id: str = ""
    coverage: dict[str, Any] | None = None
    error: Any = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.suite is not None:
            data["suite"] = self.suite.to_dict()
        if self.test is not None:
            data["test"] = self.test.to_dict()
        if self.type == EventType.COVERAGE:
            data["session_id"] = self.session_id
            data["coverage"] = self.coverage
        if self.error is not None:
            data["error"] = self.error if isinstance(self.error, (str, dict)) else str(self.error)
        return data
