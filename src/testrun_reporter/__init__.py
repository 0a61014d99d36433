"""
testrun-reporter - result aggregation and coverage merging for distributed test runs.

This package observes the lifecycle events of a multi-environment test run
(several browser/platform sessions, each running a tree of suites and
tests) and provides:
- Per-session and global pass/fail/skip totals
- A per-session ledger of failures replayed at the end of the run
- Additive merging of istanbul coverage snapshots from every session
- Reconciliation with a coverage artifact left by a previous run
- Record/replay of host event streams

Example:
    from testrun_reporter import Reporter, ReporterConfig, EventDispatcher

    reporter = Reporter(ReporterConfig(file="coverage-final.json"))
    dispatcher = EventDispatcher()
    reporter.register(dispatcher)

    # The host engine emits ReporterEvents through the dispatcher,
    # or calls reporter.suite_start(...), reporter.test_fail(...) directly.
    totals = reporter.run_end()
"""

__version__ = "0.1.0"

from testrun_reporter.config import ReporterConfig, Watermarks
from testrun_reporter.core import (
    ErrorLedger,
    EventDispatcher,
    LedgerEntry,
    RunTotals,
    Session,
    SessionRegistry,
    SessionState,
)
from testrun_reporter.coverage import (
    CoverageCollector,
    CoverageReport,
    JsonReport,
    PersistenceBridge,
)
from testrun_reporter.exceptions import (
    ConfigurationError,
    CoverageArtifactError,
    CoverageError,
    CoverageFormatError,
    ReplayError,
    ReporterError,
    SessionNotFoundError,
)
from testrun_reporter.models import EventType, ReporterEvent, Suite, Test, has_error
from testrun_reporter.reporter import Reporter

__all__ = [
    "__version__",
    "ReporterConfig",
    "Watermarks",
    "ErrorLedger",
    "EventDispatcher",
    "LedgerEntry",
    "RunTotals",
    "Session",
    "SessionRegistry",
    "SessionState",
    "CoverageCollector",
    "CoverageReport",
    "JsonReport",
    "PersistenceBridge",
    "ConfigurationError",
    "CoverageArtifactError",
    "CoverageError",
    "CoverageFormatError",
    "ReplayError",
    "ReporterError",
    "SessionNotFoundError",
    "EventType",
    "ReporterEvent",
    "Suite",
    "Test",
    "has_error",
    "Reporter",
]
