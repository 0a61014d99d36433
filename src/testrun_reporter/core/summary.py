"""
Run aggregation arithmetic and summary text.

Everything here is pure: it reads registry state and returns values or
strings. Colouring and printing live in the reporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from testrun_reporter.core.ledger import LedgerEntry
from testrun_reporter.core.sessions import Session

FATAL_SUFFIX = "; fatal error occurred"


@dataclass(frozen=True)
class RunTotals:
    """Global totals over every registered session."""

    environments: int = 0
    tests: int = 0
    failed: int = 0
    skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "environments": self.environments,
            "tests": self.tests,
            "failed": self.failed,
            "skipped": self.skipped,
        }


def compute_totals(sessions: Iterable[Session]) -> RunTotals:
    """Sum root-suite counters over all sessions in a single pass."""
    environments = tests = failed = skipped = 0
    for session in sessions:
        suite = session.suite
        environments += 1
        tests += suite.num_tests
        failed += suite.num_failed_tests
        skipped += suite.num_skipped_tests
    return RunTotals(environments=environments, tests=tests, failed=failed, skipped=skipped)


def format_seconds(milliseconds: float) -> str:
    """Milliseconds as seconds, full precision, no trailing ``.0``."""
    seconds = milliseconds / 1000
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))


def format_suite_summary(
    name: str,
    failed: int,
    total: int,
    skipped: int = 0,
    has_error: bool = False,
) -> str:
    summary = f"{name}: {failed}/{total} tests failed"
    if skipped:
        summary += f" ({skipped} skipped)"
    if has_error:
        summary += FATAL_SUFFIX
    return summary


def format_totals(totals: RunTotals, fatal: bool = False) -> str:
    message = (
        f"TOTAL: tested {totals.environments} platforms, "
        f"{totals.failed}/{totals.tests} failed"
    )
    if totals.skipped:
        message += f" ({totals.skipped} skipped)"
    if fatal:
        message += FATAL_SUFFIX
    return message


def format_entry_heading(entry: LedgerEntry) -> str:
    return f"x {entry.test_id} ({format_seconds(entry.time_elapsed)}s)"
