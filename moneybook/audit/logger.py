"""
Audit Logger

DESIGN DECISION: Every store mutation and persistence pass is logged.
This provides:
1. Traceability of what changed during a session
2. Debugging capability
3. A subscriber that exercises the stores' publish/subscribe hook

The audit logger:
- Logs through structlog (JSON lines)
- Keeps a bounded in-memory trail the front end can show
- Is a plain callable, so it can be passed anywhere an EventListener fits
"""

from collections import deque
from typing import Optional

import structlog

from moneybook.models.audit import AuditEvent, AuditEventType, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail of the most recent events
    """

    def __init__(self, max_events: int = 1000):
        """
        Initialize audit logger.

        Args:
            max_events: How many events the in-memory trail keeps.
        """
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._logger = structlog.get_logger("moneybook.audit")

    def __call__(self, event: AuditEvent) -> None:
        self.log(event)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and record it in the trail."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._events.append(event)

    def recent(
        self,
        limit: int = 100,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return
            event_type: Only return events of this type

        Returns:
            List of recent events (newest first)
        """
        events = [
            event for event in reversed(self._events)
            if event_type is None or event.event_type == event_type
        ]
        return events[:limit]

    def clear(self) -> None:
        self._events.clear()
