"""
Core aggregation state: session registry, error ledger, event dispatch and
run totals.
"""

from testrun_reporter.core.dispatch import EventDispatcher
from testrun_reporter.core.ledger import ErrorLedger, LedgerEntry, format_error
from testrun_reporter.core.sessions import Session, SessionRegistry, SessionState
from testrun_reporter.core.summary import RunTotals, compute_totals

__all__ = [
    "EventDispatcher",
    "ErrorLedger",
    "LedgerEntry",
    "format_error",
    "Session",
    "SessionRegistry",
    "SessionState",
    "RunTotals",
    "compute_totals",
]
