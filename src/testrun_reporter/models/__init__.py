"""
Data models: the run tree read from the host and the events it emits.
"""

from testrun_reporter.models.events import EventType, ReporterEvent
from testrun_reporter.models.run import Suite, Test, has_error

__all__ = [
    "EventType",
    "ReporterEvent",
    "Suite",
    "Test",
    "has_error",
]
