"""
Data Models Package

This package contains all Pydantic models used in Homeschool Tracker.
All data flowing through the system must conform to these schemas.
"""

from homeschool_tracker.models.records import (
    AppState,
    Category,
    CurriculumEntry,
    Location,
    RecurringPattern,
    Requirements,
    Student,
    StudentDraft,
    StudentUpdate,
    Subject,
    SubjectDraft,
    SubjectUpdate,
    TimeEntry,
    TimeEntryDraft,
    TimeEntryUpdate,
)
from homeschool_tracker.models.intents import (
    AddStudent,
    AddSubject,
    AddTimeEntry,
    AppIntent,
    DeleteStudent,
    DeleteSubject,
    DeleteTimeEntry,
    TransitionResult,
    UpdateStudent,
    UpdateSubject,
    UpdateTimeEntry,
)
from homeschool_tracker.models.recurrence import (
    EntryTemplate,
    RecurringRequest,
    RepeatMode,
)
from homeschool_tracker.models.report import (
    DateRange,
    ProgressItem,
    StudentSummary,
)
from homeschool_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Records
    "AppState",
    "Category",
    "CurriculumEntry",
    "Location",
    "RecurringPattern",
    "Requirements",
    "Student",
    "StudentDraft",
    "StudentUpdate",
    "Subject",
    "SubjectDraft",
    "SubjectUpdate",
    "TimeEntry",
    "TimeEntryDraft",
    "TimeEntryUpdate",
    # Intents
    "AddStudent",
    "AddSubject",
    "AddTimeEntry",
    "AppIntent",
    "DeleteStudent",
    "DeleteSubject",
    "DeleteTimeEntry",
    "TransitionResult",
    "UpdateStudent",
    "UpdateSubject",
    "UpdateTimeEntry",
    # Recurrence
    "EntryTemplate",
    "RecurringRequest",
    "RepeatMode",
    # Reports
    "DateRange",
    "ProgressItem",
    "StudentSummary",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
