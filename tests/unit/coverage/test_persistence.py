"""
Unit tests for PersistenceBridge — missing, valid and malformed prior artifacts.
"""

import json
import os

import pytest

from testrun_reporter.core.sessions import SessionRegistry
from testrun_reporter.coverage.collector import CoverageCollector
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import JsonReport
from testrun_reporter.exceptions import CoverageArtifactError


@pytest.fixture
def collector(tmp_path):
    return CoverageCollector(SessionRegistry(), JsonReport(tmp_path / "out.json"))


@pytest.mark.unit
class TestPersistenceBridge:
    def test_missing_artifact_is_noop(self, tmp_path, collector):
        bridge = PersistenceBridge(tmp_path / "coverage-final.json")
        assert bridge.reconcile(collector) is False
        assert collector.coverage == {}

    def test_directory_is_not_an_artifact(self, tmp_path, collector):
        (tmp_path / "coverage-final.json").mkdir()
        assert PersistenceBridge(tmp_path / "coverage-final.json").reconcile(collector) is False

    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root can read anything")
    def test_unreadable_artifact_is_noop(self, tmp_path, collector):
        path = tmp_path / "coverage-final.json"
        path.write_text("{}")
        path.chmod(0)
        try:
            assert PersistenceBridge(path).reconcile(collector) is False
        finally:
            path.chmod(0o644)

    def test_prior_artifact_is_merged(self, tmp_path, collector, file_coverage):
        path = tmp_path / "coverage-final.json"
        path.write_text(json.dumps({"x.js": file_coverage("x.js", {"1": 5})}))
        assert PersistenceBridge(path).reconcile(collector) is True
        assert collector.coverage["x.js"]["s"] == {"1": 5}

    def test_malformed_json_propagates(self, tmp_path, collector):
        path = tmp_path / "coverage-final.json"
        path.write_text("{not json")
        with pytest.raises(CoverageArtifactError) as exc_info:
            PersistenceBridge(path).reconcile(collector)
        assert exc_info.value.path == str(path)

    def test_non_mapping_artifact_propagates(self, tmp_path, collector):
        path = tmp_path / "coverage-final.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(CoverageArtifactError):
            PersistenceBridge(path).reconcile(collector)

    def test_non_numeric_hits_propagate_as_artifact_error(self, tmp_path, collector, file_coverage):
        path = tmp_path / "coverage-final.json"
        path.write_text(json.dumps({
            "a.js": file_coverage("a.js", {"1": 1}),
            "b.js": {"s": {"1": "lots"}},
        }))
        with pytest.raises(CoverageArtifactError):
            PersistenceBridge(path).reconcile(collector)
        assert collector.coverage == {}

    def test_default_path_is_well_known_name(self):
        assert str(PersistenceBridge().path) == "coverage-final.json"
