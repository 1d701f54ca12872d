"""
Migration-on-Load

Turns a RawStateDocument (whatever shape was persisted) into a canonical
AppState. Rules, applied on every load:

1. `children` stands in for a missing `students` collection
2. A time entry's `childId` stands in for a missing `studentId`
3. A subject without a category is Core
4. A time entry without a location is Home
5. createdAt, date, startTime and endTime text becomes datetimes
6. A bare YYYY-MM-DD entry date becomes local midnight; it is never handed
   to a generic ISO parser
7. Fractional durations are rounded to whole minutes; negative ones become 0
8. Unknown category, location or recurring pattern text falls back to the
   default (Core, Home, no pattern); a recurring day outside 0-6 is dropped

IMPORTANT: Migration never writes back. The migrated shape reaches storage
with the next successful save.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from homeschool_tracker.models.raw import (
    RawStateDocument,
    RawStudentRecord,
    RawSubjectRecord,
    RawTimeEntryRecord,
)
from homeschool_tracker.models.records import (
    AppState,
    Category,
    Location,
    RecurringPattern,
    Student,
    Subject,
    TimeEntry,
    utc_now,
)
from homeschool_tracker.utils.dates import (
    is_date_only,
    parse_entry_date,
    parse_timestamp,
)


EnumT = TypeVar("EnumT", bound=Enum)


class MigrationReport(BaseModel):
    """Which legacy rules fired during one load."""

    children_renamed: bool = False
    child_ids_adopted: int = 0
    categories_defaulted: int = 0
    locations_defaulted: int = 0
    created_at_defaulted: int = 0
    date_only_dates: int = 0
    durations_rounded: int = 0
    values_coerced: int = 0

    @property
    def migrated(self) -> bool:
        """True if any legacy field name or missing default was handled."""
        return any((
            self.children_renamed,
            self.child_ids_adopted,
            self.categories_defaulted,
            self.locations_defaulted,
            self.created_at_defaulted,
            self.durations_rounded,
            self.values_coerced,
        ))

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)


def migrate_document(document: RawStateDocument) -> tuple[AppState, MigrationReport]:
    """
    Build canonical state from a raw persisted document.

    Raises:
        ValueError: If a record cannot be turned into a canonical entity
            (pydantic ValidationError is a ValueError)
    """
    report = MigrationReport()

    raw_students = document.students
    if raw_students is None and document.children is not None:
        raw_students = document.children
        report.children_renamed = True

    state = AppState(
        students=[_migrate_student(raw, report) for raw in raw_students or []],
        subjects=[_migrate_subject(raw, report) for raw in document.subjects or []],
        time_entries=[_migrate_time_entry(raw, report) for raw in document.time_entries or []],
    )
    return state, report


def _known_value(
    enum_type: type[EnumT],
    value: str,
    fallback: Optional[EnumT],
    report: MigrationReport,
) -> Optional[EnumT]:
    try:
        return enum_type(value)
    except ValueError:
        report.values_coerced += 1
        return fallback


def _created_at(value: Optional[str], report: MigrationReport) -> datetime:
    if not value:
        report.created_at_defaulted += 1
        return utc_now()
    return parse_timestamp(value)


def _migrate_student(raw: RawStudentRecord, report: MigrationReport) -> Student:
    return Student.model_validate({
        "id": raw.id,
        "name": raw.name,
        "grade": raw.grade,
        "requirements": raw.requirements,
        "subject_curriculum": raw.subject_curriculum,
        "created_at": _created_at(raw.created_at, report),
    })


def _migrate_subject(raw: RawSubjectRecord, report: MigrationReport) -> Subject:
    if raw.category:
        category = _known_value(Category, raw.category, Category.CORE, report)
    else:
        category = Category.CORE
        report.categories_defaulted += 1
    return Subject.model_validate({
        "id": raw.id,
        "name": raw.name,
        "color": raw.color,
        "category": category,
        "created_at": _created_at(raw.created_at, report),
    })


def _migrate_time_entry(raw: RawTimeEntryRecord, report: MigrationReport) -> TimeEntry:
    student_id = raw.student_id
    if student_id is None and raw.child_id is not None:
        student_id = raw.child_id
        report.child_ids_adopted += 1

    if raw.location:
        location = _known_value(Location, raw.location, Location.HOME, report)
    else:
        location = Location.HOME
        report.locations_defaulted += 1

    pattern = None
    if raw.recurring_pattern:
        pattern = _known_value(RecurringPattern, raw.recurring_pattern, None, report)

    recurring_day = raw.recurring_day
    if recurring_day is not None and not 0 <= recurring_day <= 6:
        recurring_day = None
        report.values_coerced += 1

    duration = max(0, round(raw.duration))
    if duration != raw.duration:
        report.durations_rounded += 1

    if is_date_only(raw.date):
        report.date_only_dates += 1

    return TimeEntry.model_validate({
        "id": raw.id,
        "student_id": student_id or "",
        "subject_id": raw.subject_id,
        "date": parse_entry_date(raw.date),
        "start_time": parse_timestamp(raw.start_time) if raw.start_time else None,
        "end_time": parse_timestamp(raw.end_time) if raw.end_time else None,
        "duration": duration,
        "location": location,
        "notes": raw.notes,
        "tags": raw.tags,
        "is_recurring": raw.is_recurring,
        "recurring_pattern": pattern,
        "recurring_day": recurring_day,
        "recurring_series_id": raw.recurring_series_id,
        "created_at": _created_at(raw.created_at, report),
    })
