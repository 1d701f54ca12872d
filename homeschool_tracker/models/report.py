"""
Report Models

Results of read-only aggregations over application state. These are
derived values; they are never persisted.
"""

from enum import Enum

from pydantic import BaseModel, Field


class DateRange(str, Enum):
    """Reporting periods offered for filtering time entries."""
    TODAY = "today"
    WEEK = "week"                               # Last 7 days
    MONTH = "month"                             # Since the same day last month
    SCHOOL_YEAR_TO_DATE = "school-year-to-date"  # July 1 through today
    SCHOOL_YEAR = "school-year"                 # A selected full school year
    ALL = "all"


class StudentSummary(BaseModel):
    """Minutes logged by one student, broken down several ways."""

    student_id: str
    total_minutes: int = 0
    core_minutes: int = 0
    non_core_minutes: int = 0
    home_minutes: int = 0
    away_minutes: int = 0
    entry_count: int = 0
    subject_minutes: dict[str, int] = Field(
        default_factory=dict,
        description="Subject id -> minutes"
    )

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


class ProgressItem(BaseModel):
    """Progress toward one annual-hour requirement."""

    label: str = Field(
        ...,
        description="e.g. 'Total Hours', 'Core Hours'"
    )
    actual_hours: float = Field(..., ge=0)
    required_hours: float = Field(..., gt=0)
    percentage: float = Field(
        ...,
        ge=0,
        le=100,
        description="Share of the requirement met, capped at 100"
    )
    color: str = Field(
        default="#007bff",
        description="Display color hint for the progress bar"
    )

    @property
    def is_met(self) -> bool:
        return self.actual_hours >= self.required_hours
