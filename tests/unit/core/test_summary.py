"""
Unit tests for run totals and summary formatting.
"""

import pytest

from testrun_reporter.core.ledger import LedgerEntry
from testrun_reporter.core.sessions import SessionRegistry
from testrun_reporter.core.summary import (
    RunTotals,
    compute_totals,
    format_entry_heading,
    format_seconds,
    format_suite_summary,
    format_totals,
)


@pytest.mark.unit
class TestComputeTotals:
    def test_sums_root_suite_counters(self, make_suite):
        registry = SessionRegistry()
        registry.register_root("a", make_suite("a", total=10, failed=1))
        registry.register_root("b", make_suite("b", total=5, skipped=2))
        totals = compute_totals(registry)
        assert totals == RunTotals(environments=2, tests=15, failed=1, skipped=2)

    def test_empty_registry(self):
        assert compute_totals(SessionRegistry()) == RunTotals()

    def test_order_independent(self, make_suite):
        suites = [make_suite(sid, total=n, failed=f) for sid, n, f in [("a", 3, 1), ("b", 4, 0), ("c", 7, 2)]]
        forward, backward = SessionRegistry(), SessionRegistry()
        for suite in suites:
            forward.register_root(suite.session_id, suite)
        for suite in reversed(suites):
            backward.register_root(suite.session_id, suite)
        assert compute_totals(forward) == compute_totals(backward)
        assert compute_totals(forward).tests == 14

    def test_totals_to_dict(self):
        assert RunTotals(1, 2, 3, 4).to_dict() == {
            "environments": 1,
            "tests": 2,
            "failed": 3,
            "skipped": 4,
        }


@pytest.mark.unit
class TestFormatting:
    @pytest.mark.parametrize(
        "ms, expected",
        [(1500, "1.5"), (1000, "1"), (0, "0"), (1, "0.001"), (1234.5, "1.2345")],
    )
    def test_format_seconds(self, ms, expected):
        assert format_seconds(ms) == expected

    def test_suite_summary_plain(self):
        assert format_suite_summary("chrome", 0, 12) == "chrome: 0/12 tests failed"

    def test_suite_summary_with_skips_and_error(self):
        text = format_suite_summary("chrome", 1, 12, skipped=3, has_error=True)
        assert text == "chrome: 1/12 tests failed (3 skipped); fatal error occurred"

    def test_totals_line(self):
        totals = RunTotals(environments=2, tests=15, failed=1, skipped=2)
        assert format_totals(totals) == "TOTAL: tested 2 platforms, 1/15 failed (2 skipped)"

    def test_totals_line_fatal_without_failures(self):
        totals = RunTotals(environments=1, tests=3)
        assert format_totals(totals, fatal=True) == (
            "TOTAL: tested 1 platforms, 0/3 failed; fatal error occurred"
        )

    def test_format_entry_heading(self):
        entry = LedgerEntry("abc", "suite - test", 2500, "AssertionError: nope")
        assert format_entry_heading(entry) == "x suite - test (2.5s)"
