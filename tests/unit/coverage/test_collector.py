"""
Unit tests for CoverageCollector — attribution, merging, finalisation.
"""

import json

import pytest

from testrun_reporter.core.sessions import SessionRegistry
from testrun_reporter.coverage.collector import CoverageCollector
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import JsonReport
from testrun_reporter.exceptions import SessionNotFoundError
from testrun_reporter.models.run import Suite


@pytest.fixture
def registry():
    registry = SessionRegistry()
    registry.register_root("abc", Suite(id="s1", session_id="abc"))
    registry.register_root("", Suite(id="s0"))
    return registry


@pytest.fixture
def collector(registry, tmp_path):
    return CoverageCollector(
        registry,
        JsonReport(tmp_path / "out" / "coverage-final.json"),
        PersistenceBridge(tmp_path / "prior.json"),
    )


@pytest.mark.unit
class TestCoverageCollector:
    def test_add_with_session_marks_and_merges(self, collector, registry, file_coverage):
        assert collector.add("abc", {"x.js": file_coverage("x.js", {"1": 2})}) is True
        assert registry.get("abc").coverage is True
        assert collector.coverage["x.js"]["s"] == {"1": 2}

    def test_incremental_delivery_accumulates(self, collector, file_coverage):
        collector.add("abc", {"x.js": file_coverage("x.js", {"1": 2})})
        collector.add("abc", {"x.js": file_coverage("x.js", {"1": 3})})
        assert collector.coverage["x.js"]["s"] == {"1": 5}

    def test_empty_session_outside_client_mode_is_noop(self, collector, registry, file_coverage):
        assert collector.add("", {"x.js": file_coverage("x.js", {"1": 2})}) is False
        assert collector.coverage == {}
        assert registry.get("").coverage is False

    def test_empty_session_in_client_mode_accepted(self, registry, tmp_path, file_coverage):
        collector = CoverageCollector(
            registry,
            JsonReport(tmp_path / "coverage-final.json"),
            PersistenceBridge(tmp_path / "prior.json"),
            client_mode=True,
        )
        assert collector.add("", {"x.js": file_coverage("x.js", {"1": 2})}) is True
        assert registry.get("").coverage is True

    def test_unregistered_session_raises(self, collector, file_coverage):
        with pytest.raises(SessionNotFoundError):
            collector.add("ghost", {"x.js": file_coverage("x.js", {"1": 1})})
        assert collector.coverage == {}

    def test_finalize_writes_artifact(self, collector, tmp_path, file_coverage):
        collector.add("abc", {"x.js": file_coverage("x.js", {"1": 2, "2": 0})})
        report = collector.finalize()
        written = json.loads((tmp_path / "out" / "coverage-final.json").read_text())
        assert written["x.js"]["s"] == {"1": 2, "2": 0}
        assert report.path == tmp_path / "out" / "coverage-final.json"
        assert report.summary["statements"].pct == 50.0

    def test_finalize_merges_prior_artifact(self, collector, tmp_path, file_coverage):
        (tmp_path / "prior.json").write_text(json.dumps({"x.js": file_coverage("x.js", {"1": 5})}))
        collector.add("abc", {"x.js": file_coverage("x.js", {"1": 3})})
        report = collector.finalize()
        assert report.data["x.js"]["s"] == {"1": 8}

    def test_finalize_twice_does_not_remerge(self, collector, tmp_path, file_coverage):
        (tmp_path / "prior.json").write_text(json.dumps({"x.js": file_coverage("x.js", {"1": 5})}))
        first = collector.finalize()
        second = collector.finalize()
        assert second is first
        assert collector.coverage["x.js"]["s"] == {"1": 5}
