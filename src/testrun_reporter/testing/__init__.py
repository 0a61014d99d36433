"""
Testing utilities: record a host event stream and replay it later.
"""

from testrun_reporter.testing.replay import EventLogReplayer, EventRecorder

__all__ = [
    "EventLogReplayer",
    "EventRecorder",
]
