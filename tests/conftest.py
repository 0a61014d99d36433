"""
Root conftest.py — Shared fixtures for all tests.
"""

import io

import pytest
from rich.console import Console

from testrun_reporter.config.settings import ReporterConfig
from testrun_reporter.models.run import Suite, Test
from testrun_reporter.reporter import Reporter


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external resources")
    config.addinivalue_line("markers", "integration: end-to-end tests touching the filesystem")


# ---------------------------------------------------------------------------
# Run tree helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def make_suite():
    """
    Build a root suite with the given outcome counts.

    ``make_suite("chrome", total=10, failed=1, skipped=2)`` creates ten leaf
    tests: one failed, two skipped, the rest passed.
    """

    def _make(session_id, total=0, failed=0, skipped=0, name=None, error=None):
        suite = Suite(id=f"root-{session_id}", name=name or session_id or "client", session_id=session_id)
        suite.error = error
        for i in range(total):
            test = Test(id=f"{suite.name} - test {i}", session_id=session_id, time_elapsed=100 * i)
            if i < failed:
                test.error = AssertionError(f"expected {i} to pass")
            elif i < failed + skipped:
                test.skipped = "not supported"
            suite.add(test)
        return suite

    return _make


# ---------------------------------------------------------------------------
# Coverage helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def file_coverage():
    """Build an istanbul file coverage: statement N sits on line N."""

    def _make(path, statements, functions=None, branches=None):
        return {
            "path": path,
            "statementMap": {
                key: {"start": {"line": int(key), "column": 0}, "end": {"line": int(key), "column": 10}}
                for key in statements
            },
            "fnMap": {},
            "branchMap": {},
            "s": dict(statements),
            "f": dict(functions or {}),
            "b": {k: list(v) for k, v in (branches or {}).items()},
        }

    return _make


# ---------------------------------------------------------------------------
# Reporter helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def summary_console():
    """Console writing plain text into a buffer (read with .file.getvalue())."""
    return Console(file=io.StringIO(), color_system=None, highlight=False, width=200)


@pytest.fixture
def make_reporter(tmp_path, monkeypatch, summary_console):
    """Reporter factory working inside an isolated directory."""
    monkeypatch.chdir(tmp_path)

    def _make(mode="runner", file="coverage-final.json"):
        config = ReporterConfig(file=file, mode=mode, output=io.StringIO())
        return Reporter(config, console=summary_console)

    return _make
