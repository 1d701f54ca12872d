"""
Date helpers for Homeschool Tracker.

Every TimeEntry date is a local calendar day held as a naive datetime at
midnight. All parsing of bare YYYY-MM-DD text goes through
parse_local_date; a generic ISO parser never sees it, because a date-only
string read as UTC midnight lands on the previous day west of Greenwich.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Weekday numbering used by recurring requests and persisted data
SUNDAY = 0
SATURDAY = 6


def is_date_only(value: str) -> bool:
    """True for text in bare YYYY-MM-DD form."""
    return bool(DATE_ONLY_PATTERN.match(value))


def parse_local_date(value: str) -> datetime:
    """
    Build a local calendar date at midnight from YYYY-MM-DD text.

    Raises:
        ValueError: If the text is not a bare date or is not a real date
    """
    if not is_date_only(value):
        raise ValueError(f"Not a YYYY-MM-DD date: {value!r}")
    year, month, day = (int(part) for part in value.split("-"))
    return datetime(year, month, day)


def to_local_naive(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def as_local_day(value: Union[date, datetime]) -> datetime:
    """
    Normalize a date or datetime into a TimeEntry date value.

    Plain dates become local midnight; aware datetimes are moved to local
    wall-clock time; naive datetimes are kept as they are.
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    return datetime(value.year, value.month, value.day)


def parse_entry_date(value: str) -> datetime:
    """Parse persisted TimeEntry date text (bare date or full timestamp)."""
    if is_date_only(value):
        return parse_local_date(value)
    return to_local_naive(isoparse(value))


def parse_timestamp(value: str) -> datetime:
    """Parse persisted timestamp text (createdAt, startTime, endTime)."""
    return isoparse(value)


def format_entry_date(value: datetime) -> str:
    """Serialize a TimeEntry date; midnight values are written as YYYY-MM-DD."""
    if value.tzinfo is None and value.time() == datetime.min.time():
        return value.date().isoformat()
    return value.isoformat()


def weekday_index(day: date) -> int:
    """Weekday as 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def is_school_day(day: date) -> bool:
    """Monday through Friday."""
    return 1 <= weekday_index(day) <= 5


def today_local() -> date:
    return date.today()


# =============================================================================
# SCHOOL YEAR
# =============================================================================

def school_year_for(day: date, start_month: int = 7) -> int:
    """Calendar year in which the school year containing `day` starts."""
    return day.year if day.month >= start_month else day.year - 1


def school_year_bounds(year: int, start_month: int = 7) -> tuple[date, date]:
    """Half-open [start, end) range of the school year starting in `year`."""
    return date(year, start_month, 1), date(year + 1, start_month, 1)


def current_school_year(today: Optional[date] = None, start_month: int = 7) -> int:
    return school_year_for(today or today_local(), start_month)


def school_year_label(year: int) -> str:
    """e.g. 2024 -> '2024-2025'."""
    return f"{year}-{year + 1}"
