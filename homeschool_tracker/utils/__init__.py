"""Utility helpers (ids, dates)."""

from homeschool_tracker.utils.dates import (
    DATE_ONLY_PATTERN,
    as_local_day,
    current_school_year,
    format_entry_date,
    is_date_only,
    is_school_day,
    parse_entry_date,
    parse_local_date,
    parse_timestamp,
    school_year_bounds,
    school_year_for,
    school_year_label,
    to_local_naive,
    today_local,
    weekday_index,
)
from homeschool_tracker.utils.ids import generate_id, to_base36

__all__ = [
    "DATE_ONLY_PATTERN",
    "as_local_day",
    "current_school_year",
    "format_entry_date",
    "generate_id",
    "is_date_only",
    "is_school_day",
    "parse_entry_date",
    "parse_local_date",
    "parse_timestamp",
    "school_year_bounds",
    "school_year_for",
    "school_year_label",
    "to_base36",
    "to_local_naive",
    "today_local",
    "weekday_index",
]
