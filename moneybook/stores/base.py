"""
Store Base

Both stores are monitors: every read of the full collection and every
mutation happens under one re-entrant lock per store. Subscribers are
called after the lock is released, once per mutating call.
"""

import threading
from typing import Optional

import structlog

from moneybook.models.audit import AuditEvent, EventListener


class ObservableStore:
    """Lock plus publish/subscribe hook shared by the stores."""

    def __init__(self):
        self._lock = threading.RLock()
        self._listeners: list[EventListener] = []
        self._logger = structlog.get_logger(type(self).__name__)

    def subscribe(self, listener: EventListener) -> None:
        """Call listener with an AuditEvent after each mutating call."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def _publish(self, event: Optional[AuditEvent]) -> None:
        if event is None:
            return
        for listener in list(self._listeners):
            listener(event)
