"""
Recurring Request Models

A recurring request describes one repeating schedule for one student.
The generator turns it into concrete TimeEntryDraft objects; nothing here
is persisted.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from homeschool_tracker.models.records import (
    Location,
    RecurringPattern,
    TagList,
)


class RepeatMode(str, Enum):
    """How a recurring series ends. Exactly one mode is active per request."""
    WEEKS = "weeks"            # Stop after a number of weeks
    UNTIL_DATE = "until-date"  # Stop after an explicit end date


class EntryTemplate(BaseModel):
    """Fields stamped onto every generated occurrence."""

    subject_id: str = Field(
        ...,
        description="Subject studied in every occurrence"
    )
    duration: int = Field(
        ...,
        gt=0,
        description="Duration in minutes"
    )
    location: Location = Location.HOME
    notes: Optional[str] = None
    tags: TagList = None


class RecurringRequest(BaseModel):
    """
    One logical recurring-entry request for a single student.

    For multi-student requests, build one RecurringRequest per student
    (see RecurringRequest.for_student) so each gets its own series.
    """

    student_id: str = Field(
        default="",
        description="Student receiving the series"
    )
    start_date: date = Field(
        ...,
        description="First day considered"
    )
    pattern: RecurringPattern = Field(
        ...,
        description="daily-weekdays or weekly"
    )
    weekday: Optional[int] = Field(
        default=None,
        ge=0,
        le=6,
        description="Target weekday for weekly patterns (0=Sunday..6=Saturday)"
    )
    repeat_mode: RepeatMode = Field(
        default=RepeatMode.WEEKS,
        description="Which stop condition is active"
    )
    weeks: Optional[int] = Field(
        default=None,
        description="Week budget for RepeatMode.WEEKS"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Last allowed day for RepeatMode.UNTIL_DATE"
    )
    template: EntryTemplate

    @model_validator(mode='after')
    def default_weekday(self) -> 'RecurringRequest':
        """Weekly requests without a weekday repeat on the start date's weekday."""
        if self.pattern == RecurringPattern.WEEKLY and self.weekday is None:
            self.weekday = self.start_date.isoweekday() % 7
        return self

    def for_student(self, student_id: str) -> 'RecurringRequest':
        """Copy of this request targeting another student."""
        return self.model_copy(update={"student_id": student_id})
