"""
Reporter: the event sink the host test engine drives.

The reporter owns one session registry, one error ledger and one coverage
collector per run. Each host event updates exactly one of them; at run end
it sums the registry, replays the ledger, prints the totals and writes the
consolidated coverage artifact.

Example:
    from testrun_reporter import Reporter, ReporterConfig, EventDispatcher

    reporter = Reporter(ReporterConfig(file="build/coverage-final.json"))
    dispatcher = EventDispatcher()
    reporter.register(dispatcher)
    # ... host emits ReporterEvents through the dispatcher ...
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from rich.console import Console
from rich.text import Text

from testrun_reporter.config.settings import ReporterConfig
from testrun_reporter.core.dispatch import EventDispatcher
from testrun_reporter.core.ledger import ErrorLedger, format_error
from testrun_reporter.core.sessions import SessionRegistry
from testrun_reporter.core.summary import (
    RunTotals,
    compute_totals,
    format_entry_heading,
    format_suite_summary,
    format_totals,
)
from testrun_reporter.coverage.collector import CoverageCollector
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import CoverageReport, JsonReport
from testrun_reporter.models.events import EventType, ReporterEvent
from testrun_reporter.models.run import has_error

logger = logging.getLogger(__name__)

PASS_GLYPH = "✓"
FAIL_GLYPH = "×"
SKIP_GLYPH = "~"


def _console(file: Any = None) -> Console:
    # file=None resolves sys.stdout at write time
    return Console(file=file, highlight=False, emoji=False, markup=False)


class Reporter:
    """
    Aggregates results and coverage across every session of a test run.

    Args:
        config: Reporter configuration. Defaults to ``ReporterConfig()``.
        console: Console for summaries. Defaults to standard output.
        bridge: Persistence bridge used to fold in a prior artifact.
    """

    def __init__(
        self,
        config: ReporterConfig | None = None,
        *,
        console: Console | None = None,
        bridge: PersistenceBridge | None = None,
    ) -> None:
        self.config = config or ReporterConfig()
        self.sessions = SessionRegistry()
        self.errors = ErrorLedger()
        self.collector = CoverageCollector(
            self.sessions,
            JsonReport(self.config.file, self.config.watermarks),
            bridge,
            client_mode=self.config.is_client,
        )
        self.console = console or _console()
        self.output = _console(self.config.output)
        self.has_errors = False
        self.totals: RunTotals | None = None
        self.coverage_report: CoverageReport | None = None

    @property
    def mode(self) -> str:
        return self.config.mode

    # ── Wiring ───────────────────────────────────────────────────

    def register(self, dispatcher: EventDispatcher, *, priority: int = 0) -> None:
        """Subscribe this reporter to every host event on ``dispatcher``."""
        handlers = {
            EventType.SUITE_START: lambda e: self.suite_start(e.suite),
            EventType.SUITE_END: lambda e: self.suite_end(e.suite),
            EventType.SUITE_ERROR: lambda e: self.suite_error(e.suite),
            EventType.TEST_PASS: lambda e: self.test_pass(e.test),
            EventType.TEST_FAIL: lambda e: self.test_fail(e.test),
            EventType.TEST_SKIP: lambda e: self.test_skip(e.test),
            EventType.COVERAGE: lambda e: self.coverage(e.session_id, e.coverage or {}),
            EventType.FATAL_ERROR: lambda e: self.fatal_error(e.error),
            EventType.RUN_END: lambda e: self.run_end(),
        }
        for event, handler in handlers.items():
            dispatcher.on(event, handler, priority=priority)

    def handle(self, event: ReporterEvent) -> None:
        """Process a single event without a dispatcher."""
        dispatcher = EventDispatcher()
        self.register(dispatcher)
        dispatcher.emit(event)

    # ── Host events ──────────────────────────────────────────────

    def suite_start(self, suite: Any) -> None:
        if suite.parent is not None:
            return
        session_id = suite.session_id or ""
        self.sessions.register_root(session_id, suite)
        if session_id:
            self._print(f"\n‣ Created session {suite.name} ({session_id})")

    def suite_end(self, suite: Any) -> None:
        if suite.parent is not None:
            return
        session_id = suite.session_id or ""
        if session_id in self.sessions:
            self.sessions.complete(session_id)
        if self.config.is_client or not session_id:
            return

        errored = has_error(suite)
        failed = suite.num_failed_tests
        summary = format_suite_summary(
            suite.name,
            failed,
            suite.num_tests,
            suite.num_skipped_tests,
            has_error=errored,
        )
        self._print("\n")
        self._print(summary, style="red" if failed or errored else "green")
        self._print("")

    def suite_error(self, suite: Any) -> None:
        self.has_errors = True
        logger.debug(
            "Suite error in %r (session %r)",
            getattr(suite, "name", ""),
            getattr(suite, "session_id", ""),
        )

    def fatal_error(self, error: Any) -> None:
        self.has_errors = True
        self._print(f"\nFatal error: {format_error(error)}", style="bold red")

    def test_pass(self, test: Any = None) -> None:
        self._glyph(PASS_GLYPH, "green")

    def test_fail(self, test: Any) -> None:
        self.errors.record(test.session_id or "", test.id, test.time_elapsed, test.error)
        self._glyph(FAIL_GLYPH, "red")

    def test_skip(self, test: Any = None) -> None:
        self._glyph(SKIP_GLYPH, "grey50")

    def coverage(self, session_id: str, coverage: Mapping[str, Any]) -> None:
        self.collector.add(session_id, coverage)

    def run_end(self) -> RunTotals:
        totals = compute_totals(self.sessions)
        self.totals = totals

        self._print("")
        if totals.failed > 0:
            self._print("\nReported Test Errors:\n", style="bold red")
        for _session_id, entries in self.errors.drain_all():
            for entry in entries:
                heading = Text(format_entry_heading(entry), style="white")
                heading.stylize("red", 0, 1)
                heading.stylize("bold", 2, 2 + len(entry.test_id))
                self.console.print(heading, soft_wrap=True)
                self._print(entry.error, style="red")
                self._print("")

        failed = totals.failed > 0 or self.has_errors
        self._print(
            "\n" + format_totals(totals, fatal=self.has_errors),
            style="red" if failed else "green",
        )
        logger.info(
            "Run finished: %d environment(s), %d/%d failed, %d skipped",
            totals.environments,
            totals.failed,
            totals.tests,
            totals.skipped,
        )

        self.coverage_report = self.collector.finalize()
        for metric, level in self.coverage_report.levels().items():
            logger.info(
                "Coverage %s: %.2f%% (%s)",
                metric,
                self.coverage_report.summary[metric].pct,
                level,
            )
        return totals

    # ── Output ───────────────────────────────────────────────────

    def _print(self, text: str, style: str = "") -> None:
        self.console.print(Text(text, style=style), soft_wrap=True)

    def _glyph(self, glyph: str, style: str) -> None:
        self.output.print(Text(glyph, style=style), end="", soft_wrap=True)
