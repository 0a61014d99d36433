"""
Coverage merging, persistence and artifact writing.
"""

from testrun_reporter.coverage.collector import CoverageCollector
from testrun_reporter.coverage.istanbul import (
    MetricSummary,
    merge_coverage,
    merge_file_coverage,
    summarize,
)
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import CoverageReport, JsonReport

__all__ = [
    "CoverageCollector",
    "CoverageReport",
    "JsonReport",
    "MetricSummary",
    "PersistenceBridge",
    "merge_coverage",
    "merge_file_coverage",
    "summarize",
]
