"""
Event dispatch from the host engine to reporter handlers.

Design:
- EventDispatcher is the central registry; handlers run in priority order (lower = earlier).
- Dispatch is synchronous: each event runs to completion in the caller's thread
  before emit() returns, so handlers never observe events out of order.
- Handler exceptions propagate to the host. A malformed coverage artifact at
  run end must abort the run rather than be swallowed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

from testrun_reporter.models.events import EventType, ReporterEvent

logger = logging.getLogger(__name__)

Handler = Callable[[ReporterEvent], Any]


class EventDispatcher:
    """
    Central registry for host event handlers.

    Handlers are called in priority order (lower number = higher priority);
    handlers with equal priority run in registration order.
    """

    def __init__(self) -> None:
        # event type -> list of (priority, handler)
        self._handlers: dict[EventType, list[tuple[int, Handler]]] = defaultdict(list)

    def on(self, event: EventType | str, handler: Handler, *, priority: int = 0) -> None:
        """Register a handler for an event. Lower priority runs first."""
        event = EventType(event)
        self._handlers[event].append((priority, handler))
        self._handlers[event].sort(key=lambda x: x[0])

    def off(self, event: EventType | str, handler: Handler) -> None:
        """Unregister a handler for an event."""
        event = EventType(event)
        self._handlers[event] = [(p, h) for p, h in self._handlers[event] if h is not handler]

    def handlers(self, event: EventType | str) -> list[Handler]:
        return [h for _p, h in self._handlers[EventType(event)]]

    def emit(self, event: ReporterEvent) -> ReporterEvent:
        """Run all handlers for the event in priority order and return it."""
        handlers = self._handlers[event.type]
        logger.debug("Dispatching %s to %d handler(s)", event.type.value, len(handlers))
        for _priority, handler in handlers:
            handler(event)
        return event
