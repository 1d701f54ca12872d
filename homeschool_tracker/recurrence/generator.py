"""
Recurring Entry Generator

Expands one RecurringRequest into concrete TimeEntryDraft objects. Drafts
are not persisted here; callers dispatch each one as its own AddTimeEntry.

Patterns:
- daily-weekdays: every Monday-Friday from the start date. In week mode a
  week completes each time a Sunday is reached after at least one entry
  has been emitted.
- weekly: the first target weekday on or after the start date, then every
  7 days. In week mode the entry count equals the week budget.

A request without a resolvable stop condition yields no entries.
"""

from datetime import date, timedelta
from typing import Optional

from homeschool_tracker.models.recurrence import RecurringRequest, RepeatMode
from homeschool_tracker.models.records import RecurringPattern, TimeEntryDraft
from homeschool_tracker.utils.dates import SUNDAY, is_school_day, weekday_index
from homeschool_tracker.utils.ids import generate_id


ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(weeks=1)


def generate_recurring_entries(request: RecurringRequest) -> list[TimeEntryDraft]:
    """
    Build the drafts for one recurring series.

    Args:
        request: Schedule, stop condition and entry template for one student

    Returns:
        Drafts in date order sharing one fresh series id; empty if the
        stop condition is missing, the week budget is not positive or the
        end date precedes the start date
    """
    stop = _resolve_stop(request)
    if stop is None:
        return []
    weeks, end_date = stop

    if request.pattern == RecurringPattern.DAILY_WEEKDAYS:
        days = _weekday_dates(request.start_date, weeks, end_date)
    else:
        days = _weekly_dates(request.start_date, request.weekday, weeks, end_date)

    series_id = generate_id()
    return [_draft(request, day, series_id) for day in days]


def _resolve_stop(request: RecurringRequest) -> Optional[tuple[Optional[int], Optional[date]]]:
    """Return (week budget, end date) with exactly one set, or None if unusable."""
    if request.repeat_mode == RepeatMode.UNTIL_DATE:
        if request.end_date is None or request.end_date < request.start_date:
            return None
        return None, request.end_date
    if request.weeks is None or request.weeks <= 0:
        return None
    return request.weeks, None


def _weekday_dates(start: date, weeks: Optional[int], end_date: Optional[date]) -> list[date]:
    days = []
    weeks_done = 0
    current = start
    while True:
        if end_date is not None and current > end_date:
            break
        if weeks is not None and weeks_done >= weeks:
            break
        if is_school_day(current):
            days.append(current)
        elif weekday_index(current) == SUNDAY and days:
            weeks_done += 1
        current += ONE_DAY
    return days


def _weekly_dates(
    start: date,
    weekday: int,
    weeks: Optional[int],
    end_date: Optional[date],
) -> list[date]:
    current = start + timedelta(days=(weekday - weekday_index(start)) % 7)
    days = []
    while True:
        if end_date is not None and current > end_date:
            break
        if weeks is not None and len(days) >= weeks:
            break
        days.append(current)
        current += ONE_WEEK
    return days


def _draft(request: RecurringRequest, day: date, series_id: str) -> TimeEntryDraft:
    template = request.template
    weekly = request.pattern == RecurringPattern.WEEKLY
    return TimeEntryDraft(
        student_id=request.student_id,
        subject_id=template.subject_id,
        date=day,
        duration=template.duration,
        location=template.location,
        notes=template.notes,
        tags=list(template.tags) if template.tags else None,
        is_recurring=True,
        recurring_pattern=request.pattern,
        recurring_day=request.weekday if weekly else None,
        recurring_series_id=series_id,
    )
