"""
Coverage collector: merges snapshots delivered by sessions into one report.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from testrun_reporter.core.sessions import SessionRegistry
from testrun_reporter.coverage.istanbul import merge_coverage
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import CoverageReport, JsonReport

logger = logging.getLogger(__name__)


class CoverageCollector:
    """
    Owns the merged coverage accumulator for a run.

    Snapshots are attributed to a session. In client mode the empty session
    id is a valid attribution; in any other mode coverage without a session
    id cannot be attributed and is dropped.

    Example:
        collector = CoverageCollector(registry, JsonReport("coverage-final.json"))
        collector.add("chrome-1", snapshot)
        report = collector.finalize()
    """

    def __init__(
        self,
        registry: SessionRegistry,
        report: JsonReport | None = None,
        bridge: PersistenceBridge | None = None,
        *,
        client_mode: bool = False,
    ) -> None:
        self.registry = registry
        self.report = report or JsonReport()
        self.bridge = bridge or PersistenceBridge()
        self.client_mode = client_mode
        self._coverage: dict[str, Any] = {}
        self._final: CoverageReport | None = None

    @property
    def coverage(self) -> dict[str, Any]:
        """The merged coverage so far (live view)."""
        return self._coverage

    def accepts(self, session_id: str) -> bool:
        return self.client_mode or bool(session_id)

    def add(self, session_id: str, snapshot: Mapping[str, Any]) -> bool:
        """Merge a session's snapshot. Returns False if it was dropped."""
        if not self.accepts(session_id):
            logger.debug("Dropping coverage without a session id (%d file(s))", len(snapshot or {}))
            return False
        session = self.registry.get(session_id or "")
        self.merge(snapshot)
        session.coverage = True
        logger.debug("Merged coverage from session %r (%d file(s))", session_id, len(snapshot))
        return True

    def merge(self, snapshot: Mapping[str, Any]) -> None:
        """Merge unattributed coverage data, such as a prior artifact."""
        merge_coverage(self._coverage, snapshot)

    def finalize(self) -> CoverageReport:
        """
        Fold in any prior artifact and write the consolidated report.

        Only the first call does any work; later calls return the same
        report so a prior artifact is never merged twice.
        """
        if self._final is not None:
            logger.warning("Coverage already finalized to %s; not rewriting", self._final.path)
            return self._final
        self.bridge.reconcile(self)
        self._final = self.report.write(self._coverage)
        return self._final
