"""Read-only reports over application state."""

from homeschool_tracker.reports.builder import (
    UNKNOWN_COLOR,
    UNKNOWN_STUDENT,
    UNKNOWN_SUBJECT,
    ReportBuilder,
    date_range_label,
    format_duration,
    format_hours_decimal,
)

__all__ = [
    "UNKNOWN_COLOR",
    "UNKNOWN_STUDENT",
    "UNKNOWN_SUBJECT",
    "ReportBuilder",
    "date_range_label",
    "format_duration",
    "format_hours_decimal",
]
