"""
Reconciliation with a coverage artifact left on disk by an earlier run.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from testrun_reporter.config.settings import DEFAULT_COVERAGE_FILENAME
from testrun_reporter.coverage.istanbul import validate_snapshot
from testrun_reporter.exceptions import CoverageArtifactError, CoverageFormatError

if TYPE_CHECKING:
    from testrun_reporter.coverage.collector import CoverageCollector

logger = logging.getLogger(__name__)


class PersistenceBridge:
    """
    Folds a previously written artifact into the current run's coverage.

    The prior artifact lives at the well-known default filename, which may
    differ from the path the current run writes to. A missing or unreadable
    file is the common case and is ignored; a file that exists but does not
    parse is fatal.
    """

    def __init__(self, path: str | Path = DEFAULT_COVERAGE_FILENAME) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file() and os.access(self.path, os.R_OK)

    def load(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CoverageArtifactError(str(self.path), e) from e
        try:
            return dict(validate_snapshot(data))
        except CoverageFormatError as e:
            raise CoverageArtifactError(str(self.path), e) from e

    def reconcile(self, collector: CoverageCollector) -> bool:
        """Merge the prior artifact into ``collector``. Returns True if one was found."""
        if not self.exists():
            logger.debug("No prior coverage artifact at %s", self.path)
            return False
        prior = self.load()
        logger.info("Merging prior coverage from %s (%d file(s))", self.path, len(prior))
        collector.merge(prior)
        return True
