"""
Audit Logger

Every state change and every persistence problem is logged.
This provides:
1. Traceability of what changed and when
2. The only visible signal for swallowed storage failures
3. A short in-memory history callers can inspect

The audit logger:
- Is synchronous, like the store it observes
- Never raises into the caller if logging fails
"""

import logging
from collections import deque

import structlog

from homeschool_tracker.models.audit import AuditEvent, AuditSeverity


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


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog output) at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("homeschool_tracker").setLevel(level.upper())


def get_logger(name: str = "homeschool_tracker") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. A bounded in-memory history (newest events kept)
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = get_logger("homeschool_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event reached the structured log.
        """
        self._history.append(event)

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must never break a state transition
            logging.getLogger(__name__).warning("Failed to emit audit event %s: %s", event.event_id, e)
            return False

        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))[:limit]

    def get_events_by_entity(self, entity_type: str, entity_id: str) -> list[AuditEvent]:
        """Events about one entity, oldest first."""
        return [
            event for event in self._history
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def clear(self) -> None:
        self._history.clear()
