"""
Audit Models for Homeschool Tracker

Every state change and every storage problem produces an audit event.
Events are written to the structured log and kept in a short in-memory
history; they are not part of the persisted state.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from homeschool_tracker.models.records import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Students
    STUDENT_ADDED = "student_added"
    STUDENT_UPDATED = "student_updated"
    STUDENT_DELETED = "student_deleted"

    # Subjects
    SUBJECT_ADDED = "subject_added"
    SUBJECT_UPDATED = "subject_updated"
    SUBJECT_DELETED = "subject_deleted"
    VOLUNTEER_SUBJECT_PROVISIONED = "volunteer_subject_provisioned"

    # Time entries
    TIME_ENTRY_ADDED = "time_entry_added"
    TIME_ENTRY_UPDATED = "time_entry_updated"
    TIME_ENTRY_DELETED = "time_entry_deleted"
    RECURRING_SERIES_CREATED = "recurring_series_created"

    # Intents that matched nothing
    INTENT_NO_OP = "intent_no_op"

    # Persistence
    STATE_LOADED = "state_loaded"
    STATE_MIGRATED = "state_migrated"
    STATE_LOAD_FAILED = "state_load_failed"
    STATE_SAVE_FAILED = "state_save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="'student', 'subject', 'time_entry', 'series' or 'state'"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entity_changed(AuditEventType.STUDENT_ADDED, "student", student.id)
        event = AuditEventBuilder.state_save_failed(key, error)
    """

    @staticmethod
    def entity_changed(
        event_type: AuditEventType,
        entity_type: str,
        entity_id: str,
        cascaded: int = 0,
    ) -> AuditEvent:
        verb = event_type.value.rsplit("_", 1)[-1]
        details = {"cascaded_time_entries": cascaded} if cascaded else {}
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.replace('_', ' ').capitalize()} {verb}: {entity_id}",
            details=details,
        )

    @staticmethod
    def intent_no_op(intent_type: str, entity_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INTENT_NO_OP,
            severity=AuditSeverity.DEBUG,
            entity_id=entity_id,
            description=f"{intent_type} matched no entity",
            details={"intent": intent_type},
        )

    @staticmethod
    def recurring_series_created(
        series_id: str,
        student_id: str,
        pattern: str,
        entry_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_SERIES_CREATED,
            entity_type="series",
            entity_id=series_id,
            description=f"Recurring {pattern} series created with {entry_count} entries",
            details={
                "student_id": student_id,
                "pattern": pattern,
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def volunteer_subject_provisioned(subject_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VOLUNTEER_SUBJECT_PROVISIONED,
            entity_type="subject",
            entity_id=subject_id,
            description=f"Provisioned subject: {name}",
        )

    @staticmethod
    def state_loaded(key: str, counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="state",
            entity_id=key,
            description="Application state loaded",
            details=counts,
        )

    @staticmethod
    def state_migrated(key: str, changes: dict[str, Any]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_MIGRATED,
            entity_type="state",
            entity_id=key,
            description="Legacy fields migrated on load",
            details=changes,
        )

    @staticmethod
    def state_load_failed(key: str, error: Exception) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="state",
            entity_id=key,
            description="Persisted state unreadable; starting from empty state",
            error_message=str(error),
            details={"error_type": type(error).__name__},
        )

    @staticmethod
    def state_save_failed(key: str, error: Exception) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="state",
            entity_id=key,
            description="Application state could not be persisted",
            error_message=str(error),
            details={"error_type": type(error).__name__},
        )
