"""
Configuration settings for testrun-reporter.

This module provides configuration management through environment variables
(optionally loaded from a ``.env`` file) and programmatic configuration.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TextIO, Tuple

from dotenv import load_dotenv

from testrun_reporter.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_COVERAGE_FILENAME = "coverage-final.json"
CLIENT_MODE = "client"
RUNNER_MODE = "runner"

_WATERMARK_METRICS = ("statements", "functions", "branches", "lines")


def _parse_watermark(raw: str, metric: str) -> Tuple[float, float]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ConfigurationError(
            f"Watermark for {metric} must be 'low,high', got {raw!r}"
        )
    try:
        low, high = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise ConfigurationError(f"Watermark for {metric} is not numeric: {raw!r}") from e
    if not 0 <= low <= high <= 100:
        raise ConfigurationError(
            f"Watermark for {metric} must satisfy 0 <= low <= high <= 100, got {raw!r}"
        )
    return low, high


@dataclass
class Watermarks:
    """
    Coverage thresholds forwarded to report rendering.

    Each metric holds a ``(low, high)`` pair of percentages. Values below
    ``low`` are rendered as low coverage, values at or above ``high`` as
    high coverage. Thresholds are never enforced as pass/fail.

    Environment Variables:
        REPORTER_WATERMARK_STATEMENTS: "low,high" (default "50,80")
        REPORTER_WATERMARK_FUNCTIONS: "low,high"
        REPORTER_WATERMARK_BRANCHES: "low,high"
        REPORTER_WATERMARK_LINES: "low,high"
    """
    statements: Tuple[float, float] = (50, 80)
    functions: Tuple[float, float] = (50, 80)
    branches: Tuple[float, float] = (50, 80)
    lines: Tuple[float, float] = (50, 80)

    @classmethod
    def from_env(cls) -> "Watermarks":
        """Load watermarks from environment variables."""
        values = {}
        for metric in _WATERMARK_METRICS:
            raw = os.getenv(f"REPORTER_WATERMARK_{metric.upper()}")
            if raw:
                values[metric] = _parse_watermark(raw, metric)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Watermarks":
        unknown = set(data) - set(_WATERMARK_METRICS)
        if unknown:
            raise ConfigurationError(f"Unknown watermark metrics: {sorted(unknown)}")
        return cls(**{k: (float(v[0]), float(v[1])) for k, v in data.items()})

    def to_dict(self) -> Dict[str, list]:
        return {metric: list(getattr(self, metric)) for metric in _WATERMARK_METRICS}

    def classify(self, metric: str, pct: float) -> str:
        """Return "low", "medium" or "high" for a coverage percentage."""
        low, high = getattr(self, metric)
        if pct < low:
            return "low"
        if pct < high:
            return "medium"
        return "high"


@dataclass
class ReporterConfig:
    """
    Main configuration for the reporter.

    Example:
        >>> # Load from environment
        >>> config = ReporterConfig.from_env()
        >>>
        >>> # Programmatic configuration
        >>> config = ReporterConfig(file="build/coverage.json", mode="client")

    Environment Variables:
        REPORTER_COVERAGE_FILE: Output path for the coverage artifact
        REPORTER_MODE: "client" or "runner"
        REPORTER_LOG_LEVEL: Logging level name
        REPORTER_WATERMARK_*: See Watermarks
    """
    file: str = DEFAULT_COVERAGE_FILENAME
    watermarks: Watermarks = field(default_factory=Watermarks)
    output: Optional[TextIO] = None  # glyph stream, None means sys.stdout
    mode: str = RUNNER_MODE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ReporterConfig":
        """Load configuration from environment variables."""
        mode = os.getenv("REPORTER_MODE", RUNNER_MODE).strip().lower()
        if not mode:
            raise ConfigurationError("REPORTER_MODE must not be empty")
        config = cls(
            file=os.getenv("REPORTER_COVERAGE_FILE") or DEFAULT_COVERAGE_FILENAME,
            watermarks=Watermarks.from_env(),
            mode=mode,
            log_level=os.getenv("REPORTER_LOG_LEVEL", "INFO").upper(),
        )
        logger.debug("Loaded reporter config: file=%s mode=%s", config.file, config.mode)
        return config

    @property
    def is_client(self) -> bool:
        return self.mode == CLIENT_MODE
