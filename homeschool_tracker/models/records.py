"""
Core Data Models for Homeschool Tracker

These models define the schemas for everything held in application state:
students, subjects and time entries, plus the draft and update shapes used
to create and change them.

DESIGN DECISION: Python attributes are snake_case, persisted keys are
camelCase. The alias generator maps between them, and populate_by_name lets
code build models with either spelling.

Each entity comes in three shapes:
- Draft: what a caller supplies to create the entity (no id, no createdAt)
- Entity: the stored record
- Update: every field optional; only fields explicitly set are applied, and
  fields the entity requires cannot be cleared
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from homeschool_tracker.utils.dates import (
    as_local_day,
    format_entry_date,
    parse_entry_date,
)


RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """Subject category. Absent category means CORE."""
    CORE = "Core"
    NON_CORE = "Non-Core"


class Location(str, Enum):
    """Where study time happened. Absent location means HOME."""
    HOME = "Home"
    AWAY = "Away"


class RecurringPattern(str, Enum):
    """Repetition patterns for recurring entries."""
    DAILY_WEEKDAYS = "daily-weekdays"  # Monday through Friday
    WEEKLY = "weekly"                  # One fixed weekday


# =============================================================================
# FIELD TYPES
# =============================================================================

def _coerce_local_day(value: Any) -> Any:
    if isinstance(value, str):
        return parse_entry_date(value)
    if isinstance(value, date):
        return as_local_day(value)
    return value


def _dedupe_tags(tags: Optional[list[str]]) -> Optional[list[str]]:
    if tags is None:
        return None
    return list(dict.fromkeys(tags))


# Local calendar day, written as YYYY-MM-DD when it falls on midnight
LocalDay = Annotated[
    datetime,
    BeforeValidator(_coerce_local_day),
    PlainSerializer(format_entry_date, when_used="json"),
]

# Order-preserving set of labels
TagList = Annotated[Optional[list[str]], AfterValidator(_dedupe_tags)]


class PartialUpdate(BaseModel):
    """
    Base for partial updates.

    Only fields set explicitly (model_fields_set) are applied. Fields listed
    in `required_fields` may be left unset but never set to None.
    """
    model_config = RECORD_CONFIG

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_required_not_cleared(self) -> "PartialUpdate":
        cleared = [
            name for name in self.required_fields
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"Required fields cannot be cleared: {', '.join(cleared)}")
        return self


# =============================================================================
# STUDENT
# =============================================================================

class Requirements(BaseModel):
    """
    Annual-hour targets for one student.

    Every target is independent and optional. A target of 0 or None is
    treated as "not set" when computing progress.
    """
    model_config = RECORD_CONFIG

    total_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Total hours required for the school year"
    )
    core_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Hours required in Core subjects"
    )
    non_core_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Hours required in Non-Core subjects"
    )
    home_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Hours required at home"
    )
    away_hours: Optional[float] = Field(
        default=None,
        ge=0,
        description="Hours required away from home"
    )

    @property
    def has_targets(self) -> bool:
        """True if at least one target is set to a non-zero value."""
        return any((
            self.total_hours,
            self.core_hours,
            self.non_core_hours,
            self.home_hours,
            self.away_hours,
        ))


class CurriculumEntry(BaseModel):
    """Curriculum details a student uses for one subject."""
    model_config = RECORD_CONFIG

    curriculum: Optional[str] = None
    cost: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.curriculum, self.cost, self.notes))


def _prune_curriculum(
    value: Optional[dict[str, CurriculumEntry]],
) -> Optional[dict[str, CurriculumEntry]]:
    if value is None:
        return None
    pruned = {
        subject_id: entry
        for subject_id, entry in value.items()
        if not entry.is_empty
    }
    return pruned or None


# Subject id -> curriculum; only entries with at least one non-empty field
CurriculumMap = Annotated[
    Optional[dict[str, CurriculumEntry]],
    AfterValidator(_prune_curriculum),
]


class StudentDraft(BaseModel):
    """Fields supplied when adding a student."""
    model_config = RECORD_CONFIG

    name: str = Field(
        ...,
        description="Student name (the store accepts an empty name)"
    )
    grade: Optional[str] = Field(
        default=None,
        description="Grade label, e.g. 'Kindergarten' or '5th'"
    )
    requirements: Optional[Requirements] = None
    subject_curriculum: CurriculumMap = None


class Student(StudentDraft):
    """A stored student."""

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the student was added"
    )


class StudentUpdate(PartialUpdate):
    """
    Partial update for a student.

    Setting an optional field to None clears it. `requirements` replaces the
    whole object.
    """
    required_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    grade: Optional[str] = None
    requirements: Optional[Requirements] = None
    subject_curriculum: CurriculumMap = None


# =============================================================================
# SUBJECT
# =============================================================================

class SubjectDraft(BaseModel):
    """Fields supplied when adding a subject."""
    model_config = RECORD_CONFIG

    name: str = Field(
        ...,
        description="Subject name"
    )
    color: Optional[str] = Field(
        default=None,
        description="Display color hint, e.g. '#4CAF50'"
    )
    category: Category = Field(
        default=Category.CORE,
        description="Core or Non-Core"
    )


class Subject(SubjectDraft):
    """A stored subject."""

    id: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utc_now)


class SubjectUpdate(PartialUpdate):
    """Partial update for a subject."""
    required_fields: ClassVar[tuple[str, ...]] = ("name", "category")

    name: Optional[str] = None
    color: Optional[str] = None
    category: Optional[Category] = None


# =============================================================================
# TIME ENTRY
# =============================================================================

class TimeEntryDraft(BaseModel):
    """
    Fields supplied when logging study time.

    student_id and subject_id are not checked against the store; readers
    show unresolved references as "Unknown".
    """
    model_config = RECORD_CONFIG

    student_id: str = Field(
        ...,
        description="Student this time belongs to"
    )
    subject_id: str = Field(
        ...,
        description="Subject studied"
    )
    date: LocalDay = Field(
        ...,
        description="Local calendar day the study happened"
    )
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int = Field(
        ...,
        gt=0,
        description="Duration in minutes"
    )
    location: Location = Field(
        default=Location.HOME,
        description="Home or Away"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes"
    )
    tags: TagList = None

    # Recurrence metadata
    is_recurring: Optional[bool] = None
    recurring_pattern: Optional[RecurringPattern] = None
    recurring_day: Optional[int] = Field(
        default=None,
        ge=0,
        le=6,
        description="Target weekday for weekly series (0=Sunday)"
    )
    recurring_series_id: Optional[str] = Field(
        default=None,
        description="Shared by every entry created from one recurring request"
    )


class TimeEntry(TimeEntryDraft):
    """A stored time entry."""

    id: str = Field(..., min_length=1)
    # Zero-minute entries written by older versions still load
    duration: int = Field(..., ge=0)
    created_at: datetime = Field(default_factory=utc_now)


class TimeEntryUpdate(PartialUpdate):
    """Partial update for a time entry."""
    required_fields: ClassVar[tuple[str, ...]] = (
        "student_id", "subject_id", "date", "duration", "location",
    )

    student_id: Optional[str] = None
    subject_id: Optional[str] = None
    date: Optional[LocalDay] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    location: Optional[Location] = None
    notes: Optional[str] = None
    tags: TagList = None
    is_recurring: Optional[bool] = None
    recurring_pattern: Optional[RecurringPattern] = None
    recurring_day: Optional[int] = Field(default=None, ge=0, le=6)
    recurring_series_id: Optional[str] = None


# =============================================================================
# APPLICATION STATE
# =============================================================================

class AppState(BaseModel):
    """
    All persisted application data.

    Each collection keeps insertion order.
    """
    model_config = RECORD_CONFIG

    students: list[Student] = Field(default_factory=list)
    subjects: list[Subject] = Field(default_factory=list)
    time_entries: list[TimeEntry] = Field(default_factory=list)

    def find_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def find_subject(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self.subjects if s.id == subject_id), None)

    def find_time_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return next((e for e in self.time_entries if e.id == entry_id), None)

    def entries_for_student(self, student_id: str) -> list[TimeEntry]:
        return [e for e in self.time_entries if e.student_id == student_id]

    def entries_in_series(self, series_id: str) -> list[TimeEntry]:
        """All entries created by one recurring request."""
        return [e for e in self.time_entries if e.recurring_series_id == series_id]

    @property
    def is_empty(self) -> bool:
        return not (self.students or self.subjects or self.time_entries)
