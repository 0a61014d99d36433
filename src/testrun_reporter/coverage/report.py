"""
JSON coverage artifact writer.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from testrun_reporter.config.settings import DEFAULT_COVERAGE_FILENAME, Watermarks
from testrun_reporter.coverage.istanbul import MetricSummary, summarize

logger = logging.getLogger(__name__)


@dataclass
class CoverageReport:
    """The consolidated coverage written at the end of a run."""

    path: Path
    data: dict[str, Any]
    summary: dict[str, MetricSummary] = field(default_factory=dict)
    watermarks: Watermarks = field(default_factory=Watermarks)

    def levels(self) -> dict[str, str]:
        """Watermark level ("low", "medium", "high") per metric."""
        return {
            metric: self.watermarks.classify(metric, summary.pct)
            for metric, summary in self.summary.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "files": len(self.data),
            "summary": {metric: s.to_dict() for metric, s in self.summary.items()},
            "levels": self.levels(),
        }


class JsonReport:
    """
    Serialises merged coverage to a single JSON file.

    Watermarks are carried into the returned CoverageReport for rendering;
    the JSON artifact itself holds only the coverage object so other
    istanbul-compatible tools can read it back.
    """

    def __init__(
        self,
        file: str | Path = DEFAULT_COVERAGE_FILENAME,
        watermarks: Watermarks | None = None,
    ) -> None:
        self.file = Path(file)
        self.watermarks = watermarks or Watermarks()

    def write(self, coverage: dict[str, Any]) -> CoverageReport:
        if self.file.parent != Path("."):
            self.file.parent.mkdir(parents=True, exist_ok=True)
        self.file.write_text(json.dumps(coverage), encoding="utf-8")
        logger.info("Wrote coverage for %d file(s) to %s", len(coverage), self.file)
        return CoverageReport(
            path=self.file,
            data=coverage,
            summary=summarize(coverage),
            watermarks=self.watermarks,
        )
