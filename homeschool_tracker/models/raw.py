"""
Raw Persisted Records

Persisted blobs are read into these loose models first and only then
migrated into canonical entities. They accept the legacy spellings
(`children`, `childId`) and leave defaults and date parsing to the
migration pass in homeschool_tracker.store.migration.

CRITICAL: Nothing outside the migration pass should consume these models.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


RAW_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class RawStudentRecord(BaseModel):
    model_config = RAW_CONFIG

    id: str
    name: str = ""
    grade: Optional[str] = None
    requirements: Optional[dict[str, Any]] = None
    subject_curriculum: Optional[dict[str, dict[str, Any]]] = None
    created_at: Optional[str] = None


class RawSubjectRecord(BaseModel):
    model_config = RAW_CONFIG

    id: str
    name: str = ""
    color: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None


class RawTimeEntryRecord(BaseModel):
    model_config = RAW_CONFIG

    id: str
    student_id: Optional[str] = None
    child_id: Optional[str] = None  # Legacy name for student_id
    subject_id: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: float  # Older versions stored fractional minutes
    location: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    is_recurring: Optional[bool] = None
    recurring_pattern: Optional[str] = None
    recurring_day: Optional[int] = None
    recurring_series_id: Optional[str] = None
    created_at: Optional[str] = None


class RawStateDocument(BaseModel):
    """Top-level persisted document, current or legacy layout."""
    model_config = RAW_CONFIG

    students: Optional[list[RawStudentRecord]] = None
    children: Optional[list[RawStudentRecord]] = None  # Legacy name for students
    subjects: Optional[list[RawSubjectRecord]] = None
    time_entries: Optional[list[RawTimeEntryRecord]] = None
