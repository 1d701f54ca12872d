"""
Report Builder

Read-only aggregations over an AppState: date-range filtering, per-student
and per-subject totals, progress toward annual requirements, and the
volunteer-hours view.

DESIGN DECISION: Reports never touch storage or the store.
They take a snapshot of state and return plain models, so the same
builder serves a dashboard, an export or a test.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from homeschool_tracker.models.records import AppState, Category, Location, TimeEntry
from homeschool_tracker.models.report import DateRange, ProgressItem, StudentSummary
from homeschool_tracker.utils.dates import (
    current_school_year,
    school_year_bounds,
    school_year_for,
    school_year_label,
    today_local,
)


UNKNOWN_STUDENT = "Unknown Student"
UNKNOWN_SUBJECT = "Unknown Subject"
UNKNOWN_COLOR = "#ccc"
VOLUNTEER_SUBJECT_NAME = "Volunteer Hours"

# (label, requirement field, summary field, color)
PROGRESS_TARGETS = (
    ("Total Hours", "total_hours", "total_minutes", "#007bff"),
    ("Core Hours", "core_hours", "core_minutes", "#6610f2"),
    ("Non-Core Hours", "non_core_hours", "non_core_minutes", "#fd7e14"),
    ("Home Hours", "home_hours", "home_minutes", "#28a745"),
    ("Away Hours", "away_hours", "away_minutes", "#17a2b8"),
)


class ReportBuilder:
    """
    Builds report views from one snapshot of application state.

    Usage:
        reports = ReportBuilder(store.state)
        entries = reports.filter_entries(date_range=DateRange.SCHOOL_YEAR_TO_DATE)
        summary = reports.summarize_by_student(entries)
    """

    def __init__(
        self,
        state: AppState,
        today: Optional[date] = None,
        school_year_start_month: int = 7,
        volunteer_subject_name: str = VOLUNTEER_SUBJECT_NAME,
    ):
        self._state = state
        self._today = today or today_local()
        self._start_month = school_year_start_month
        self._volunteer_subject_name = volunteer_subject_name

    @property
    def today(self) -> date:
        return self._today

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def filter_entries(
        self,
        student_id: Optional[str] = None,
        date_range: DateRange = DateRange.ALL,
        school_year: Optional[int] = None,
    ) -> list[TimeEntry]:
        """
        Entries for one student (or all) within a reporting period.

        TODAY, WEEK and MONTH are lower bounds only, so entries dated in
        the future are included. SCHOOL_YEAR uses `school_year`, or the
        current school year when it is None.
        """
        in_range = self._date_filter(date_range, school_year)
        return [
            entry for entry in self._state.time_entries
            if (student_id is None or entry.student_id == student_id)
            and in_range(entry.date.date())
        ]

    def _date_filter(self, date_range: DateRange, school_year: Optional[int]):
        today = self._today

        if date_range == DateRange.TODAY:
            return lambda day: day >= today
        elif date_range == DateRange.WEEK:
            since = today - timedelta(days=7)
            return lambda day: day >= since
        elif date_range == DateRange.MONTH:
            since = today - relativedelta(months=1)
            return lambda day: day >= since
        elif date_range == DateRange.SCHOOL_YEAR_TO_DATE:
            start, _ = school_year_bounds(
                current_school_year(today, self._start_month), self._start_month
            )
            return lambda day: start <= day <= today
        elif date_range == DateRange.SCHOOL_YEAR:
            year = school_year if school_year is not None else current_school_year(
                today, self._start_month
            )
            start, end = school_year_bounds(year, self._start_month)
            return lambda day: start <= day < end
        return lambda day: True

    def entries_for_day(self, day: date, student_id: Optional[str] = None) -> list[TimeEntry]:
        """Entries on one local calendar day (calendar view)."""
        return [
            entry for entry in self._state.time_entries
            if entry.date.date() == day
            and (student_id is None or entry.student_id == student_id)
        ]

    def available_school_years(self) -> list[int]:
        """School years that have at least one entry, newest first."""
        years = {
            school_year_for(entry.date.date(), self._start_month)
            for entry in self._state.time_entries
        }
        return sorted(years, reverse=True)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def summarize_by_student(self, entries: Iterable[TimeEntry]) -> dict[str, StudentSummary]:
        """
        Minutes per student split by category, location and subject.

        A subject that cannot be resolved counts as Core.
        """
        summaries: dict[str, StudentSummary] = {}

        for entry in entries:
            summary = summaries.get(entry.student_id)
            if summary is None:
                summary = summaries[entry.student_id] = StudentSummary(student_id=entry.student_id)

            subject = self._state.find_subject(entry.subject_id)
            category = subject.category if subject else Category.CORE

            summary.total_minutes += entry.duration
            summary.entry_count += 1

            if category == Category.CORE:
                summary.core_minutes += entry.duration
            else:
                summary.non_core_minutes += entry.duration

            if entry.location == Location.HOME:
                summary.home_minutes += entry.duration
            else:
                summary.away_minutes += entry.duration

            summary.subject_minutes[entry.subject_id] = (
                summary.subject_minutes.get(entry.subject_id, 0) + entry.duration
            )

        return summaries

    def summarize_by_subject(self, entries: Iterable[TimeEntry]) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for entry in entries:
            totals[entry.subject_id] += entry.duration
        return dict(totals)

    def progress(
        self,
        student_id: str,
        summary: Optional[StudentSummary] = None,
    ) -> list[ProgressItem]:
        """
        Progress toward each requirement the student has set.

        Requirements that are unset or zero are skipped. Percentages are
        capped at 100.

        Args:
            student_id: Student whose requirements are measured
            summary: Logged minutes to measure; zero minutes if None
        """
        student = self._state.find_student(student_id)
        if student is None or student.requirements is None:
            return []

        summary = summary or StudentSummary(student_id=student_id)
        items = []
        for label, requirement_field, summary_field, color in PROGRESS_TARGETS:
            required = getattr(student.requirements, requirement_field)
            if not required:
                continue
            actual = getattr(summary, summary_field) / 60
            items.append(ProgressItem(
                label=label,
                actual_hours=actual,
                required_hours=required,
                percentage=min(actual / required * 100, 100),
                color=color,
            ))
        return items

    # -------------------------------------------------------------------------
    # Volunteer hours
    # -------------------------------------------------------------------------

    def volunteer_entries(self) -> list[TimeEntry]:
        """Entries on the volunteer subject or with notes mentioning volunteering."""
        entries = []
        for entry in self._state.time_entries:
            subject = self._state.find_subject(entry.subject_id)
            if subject is not None and subject.name == self._volunteer_subject_name:
                entries.append(entry)
            elif entry.notes and "volunteer" in entry.notes.lower():
                entries.append(entry)
        return entries

    def volunteer_hours_by_student(self) -> dict[str, float]:
        hours: dict[str, float] = defaultdict(float)
        for entry in self.volunteer_entries():
            hours[entry.student_id] += entry.duration / 60
        return dict(hours)

    # -------------------------------------------------------------------------
    # Display lookups
    # -------------------------------------------------------------------------

    def student_name(self, student_id: str) -> str:
        student = self._state.find_student(student_id)
        return student.name if student and student.name else UNKNOWN_STUDENT

    def subject_name(self, subject_id: str) -> str:
        subject = self._state.find_subject(subject_id)
        return subject.name if subject and subject.name else UNKNOWN_SUBJECT

    def subject_color(self, subject_id: str) -> str:
        subject = self._state.find_subject(subject_id)
        return subject.color if subject and subject.color else UNKNOWN_COLOR


# =============================================================================
# FORMATTING
# =============================================================================

def format_duration(minutes: int) -> str:
    """e.g. 125 -> '2h 5m', 45 -> '45m'."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_hours_decimal(minutes: int) -> str:
    """e.g. 90 -> '1.5'."""
    return f"{minutes / 60:.1f}"


def date_range_label(date_range: DateRange, school_year: Optional[int] = None) -> str:
    if date_range == DateRange.TODAY:
        return "Today"
    elif date_range == DateRange.WEEK:
        return "Last 7 Days"
    elif date_range == DateRange.MONTH:
        return "Last Month"
    elif date_range == DateRange.SCHOOL_YEAR_TO_DATE:
        return "School Year to Date"
    elif date_range == DateRange.SCHOOL_YEAR:
        year = school_year if school_year is not None else current_school_year()
        return f"School Year ({school_year_label(year)})"
    return "All Time"
