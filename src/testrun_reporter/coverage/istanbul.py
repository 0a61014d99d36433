"""
Istanbul-format coverage arithmetic.

A coverage object maps an instrumented file path to its file coverage::

    {
        "path": "src/app.js",
        "statementMap": {"1": {"start": {"line": 3, ...}, ...}, ...},
        "fnMap": {...},
        "branchMap": {...},
        "s": {"1": 4, ...},          # statement hits
        "f": {"1": 1, ...},          # function hits
        "b": {"1": [2, 0], ...},     # hits per branch arm
        "l": {"3": 4, ...},          # optional derived line hits
    }

Merging is additive: hit counts of the same file are summed, so merging A
then B equals merging B then A, and merging A twice doubles its counts.
Line hits are re-derived from the merged statements when a statement map is
available.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Mapping

from testrun_reporter.exceptions import CoverageFormatError

METRICS = ("statements", "branches", "functions", "lines")


def validate_snapshot(snapshot: Any) -> Mapping[str, Mapping[str, Any]]:
    """
    Check that a snapshot is a mapping of path -> file coverage mapping.

    Hit maps are checked for every file before anything is merged, so a bad
    file never leaves an accumulator partially updated.
    """
    if not isinstance(snapshot, Mapping):
        raise CoverageFormatError(
            f"Coverage snapshot must be a mapping, got {type(snapshot).__name__}"
        )
    for path, file_coverage in snapshot.items():
        if not isinstance(file_coverage, Mapping):
            raise CoverageFormatError(
                f"Coverage for {path!r} must be a mapping, got {type(file_coverage).__name__}",
                path=str(path),
            )
        _check_hits(path, file_coverage)
    return snapshot


def _is_count(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_hits(path: Any, file_coverage: Mapping[str, Any]) -> None:
    for key in ("s", "f", "l"):
        hits = file_coverage.get(key) or {}
        if not isinstance(hits, Mapping) or not all(_is_count(v) for v in hits.values()):
            raise CoverageFormatError(
                f"Coverage for {path!r} has non-numeric '{key}' hits", path=str(path)
            )
    branches = file_coverage.get("b") or {}
    if not isinstance(branches, Mapping) or not all(
        isinstance(arms, list) and all(_is_count(c) for c in arms) for arms in branches.values()
    ):
        raise CoverageFormatError(
            f"Coverage for {path!r} has non-numeric 'b' hits", path=str(path)
        )


def derive_line_counts(file_coverage: Mapping[str, Any]) -> dict[str, int]:
    """Line hits from statement hits: each line keeps its busiest statement."""
    lines: dict[str, int] = {}
    statement_map = file_coverage.get("statementMap") or {}
    hits = file_coverage.get("s") or {}
    for key, location in statement_map.items():
        line = str(location["start"]["line"])
        count = hits.get(key, 0)
        if line not in lines or lines[line] < count:
            lines[line] = count
    return lines


def _add_counts(target: dict[str, int], source: Mapping[str, int]) -> None:
    for key, count in source.items():
        target[key] = target.get(key, 0) + count


def _add_branch_counts(target: dict[str, list[int]], source: Mapping[str, list[int]]) -> None:
    for key, arms in source.items():
        merged = list(target.get(key, []))
        if len(merged) < len(arms):
            merged.extend([0] * (len(arms) - len(merged)))
        for i, count in enumerate(arms):
            merged[i] += count
        target[key] = merged


def merge_file_coverage(first: Mapping[str, Any], second: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new file coverage with the hits of both inputs summed."""
    merged = copy.deepcopy(dict(first))
    for key in ("statementMap", "fnMap", "branchMap"):
        if key not in merged and key in second:
            merged[key] = copy.deepcopy(second[key])
    merged["s"] = dict(merged.get("s") or {})
    merged["f"] = dict(merged.get("f") or {})
    merged["b"] = dict(merged.get("b") or {})
    _add_counts(merged["s"], second.get("s") or {})
    _add_counts(merged["f"], second.get("f") or {})
    _add_branch_counts(merged["b"], second.get("b") or {})

    if "l" in first or "l" in second:
        if merged.get("statementMap"):
            merged["l"] = derive_line_counts(merged)
        else:
            lines = dict(first.get("l") or {})
            _add_counts(lines, second.get("l") or {})
            merged["l"] = lines
    return merged


def merge_coverage(accumulator: dict[str, Any], snapshot: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a snapshot into the accumulator in place and return it."""
    for path, file_coverage in validate_snapshot(snapshot).items():
        if path in accumulator:
            accumulator[path] = merge_file_coverage(accumulator[path], file_coverage)
        else:
            accumulator[path] = copy.deepcopy(dict(file_coverage))
    return accumulator


@dataclass(frozen=True)
class MetricSummary:
    total: int = 0
    covered: int = 0

    @property
    def pct(self) -> float:
        if not self.total:
            return 100.0
        return round(self.covered / self.total * 100, 2)

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "covered": self.covered, "pct": self.pct}


def summarize(coverage: Mapping[str, Mapping[str, Any]]) -> dict[str, MetricSummary]:
    """Totals and covered counts per metric over every file."""
    totals = {metric: [0, 0] for metric in METRICS}

    def count(metric: str, hits: Any) -> None:
        for value in hits:
            totals[metric][0] += 1
            if value > 0:
                totals[metric][1] += 1

    for file_coverage in coverage.values():
        count("statements", (file_coverage.get("s") or {}).values())
        count("functions", (file_coverage.get("f") or {}).values())
        for arms in (file_coverage.get("b") or {}).values():
            count("branches", arms)
        lines = file_coverage.get("l")
        if lines is None:
            lines = derive_line_counts(file_coverage)
        count("lines", lines.values())

    return {metric: MetricSummary(total=t, covered=c) for metric, (t, c) in totals.items()}
