"""
Configuration module for testrun-reporter.

Provides configuration management for the reporter including:
- Coverage artifact location and watermarks
- Client/runner mode selection
- Logging level
"""

from testrun_reporter.config.settings import (
    CLIENT_MODE,
    DEFAULT_COVERAGE_FILENAME,
    RUNNER_MODE,
    ReporterConfig,
    Watermarks,
)

__all__ = [
    "CLIENT_MODE",
    "DEFAULT_COVERAGE_FILENAME",
    "RUNNER_MODE",
    "ReporterConfig",
    "Watermarks",
]
