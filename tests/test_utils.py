"""Tests for id and date helpers."""

import pytest
from datetime import date, datetime, timedelta, timezone

from homeschool_tracker.utils import (
    as_local_day,
    current_school_year,
    format_entry_date,
    generate_id,
    is_date_only,
    is_school_day,
    parse_entry_date,
    parse_local_date,
    school_year_bounds,
    school_year_for,
    school_year_label,
    to_base36,
    weekday_index,
)


class TestIds:
    """Tests for entity id generation."""

    def test_base36(self):
        """Test base-36 rendering."""
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"

    def test_base36_rejects_negative(self):
        """Test negative numbers are rejected."""
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_generated_ids_are_unique(self):
        """Test ids generated in the same millisecond still differ."""
        ids = {generate_id(timestamp_ms=1700000000000) for _ in range(500)}
        assert len(ids) == 500

    def test_generated_id_shape(self):
        """Test ids are lowercase alphanumeric with a fixed-width suffix."""
        entity_id = generate_id(timestamp_ms=0)
        assert len(entity_id) == 12
        assert entity_id.isalnum()
        assert entity_id == entity_id.lower()


class TestLocalDates:
    """Tests for local calendar date handling."""

    def test_is_date_only(self):
        """Test bare dates are recognised and timestamps are not."""
        assert is_date_only("2025-06-15") is True
        assert is_date_only("2025-06-15T00:00:00Z") is False
        assert is_date_only("15/06/2025") is False

    def test_parse_local_date(self):
        """Test a bare date becomes naive midnight."""
        assert parse_local_date("2025-06-15") == datetime(2025, 6, 15)

    def test_parse_local_date_rejects_impossible_dates(self):
        """Test invalid calendar dates raise ValueError."""
        with pytest.raises(ValueError):
            parse_local_date("2025-02-30")

    def test_parse_local_date_rejects_timestamps(self):
        """Test timestamps are not accepted by the local date constructor."""
        with pytest.raises(ValueError):
            parse_local_date("2025-06-15T10:00:00")

    def test_date_only_is_stable_west_of_utc(self, pacific_time):
        """Test a bare date keeps its calendar day under a negative offset."""
        parsed = parse_entry_date("2025-06-15")
        assert (parsed.year, parsed.month, parsed.day) == (2025, 6, 15)

    def test_timestamp_converted_to_local_time(self, pacific_time):
        """Test an offset-aware timestamp is moved to local wall-clock time."""
        parsed = parse_entry_date("2025-06-15T12:00:00Z")
        assert parsed.tzinfo is None
        assert parsed == datetime(2025, 6, 15, 5, 0)

    def test_as_local_day(self):
        """Test dates and datetimes normalize to naive local values."""
        assert as_local_day(date(2025, 1, 2)) == datetime(2025, 1, 2)
        naive = datetime(2025, 1, 2, 9, 30)
        assert as_local_day(naive) == naive
        aware = datetime(2025, 1, 2, 9, 30, tzinfo=timezone(timedelta(hours=2)))
        assert as_local_day(aware).tzinfo is None

    def test_format_entry_date(self):
        """Test midnight values are written as a bare date."""
        assert format_entry_date(datetime(2025, 6, 15)) == "2025-06-15"
        assert format_entry_date(datetime(2025, 6, 15, 8, 30)) == "2025-06-15T08:30:00"

    def test_weekday_index_starts_on_sunday(self):
        """Test weekday numbering is 0=Sunday..6=Saturday."""
        assert weekday_index(date(2025, 1, 5)) == 0  # Sunday
        assert weekday_index(date(2025, 1, 6)) == 1  # Monday
        assert weekday_index(date(2025, 1, 11)) == 6  # Saturday

    def test_is_school_day(self):
        """Test Monday-Friday are school days."""
        assert is_school_day(date(2025, 1, 10)) is True
        assert is_school_day(date(2025, 1, 11)) is False
        assert is_school_day(date(2025, 1, 12)) is False


class TestSchoolYear:
    """Tests for school-year helpers (July 1 - June 30)."""

    def test_school_year_for(self):
        """Test the school year is named by its starting calendar year."""
        assert school_year_for(date(2024, 7, 1)) == 2024
        assert school_year_for(date(2025, 6, 30)) == 2024
        assert school_year_for(date(2025, 7, 1)) == 2025

    def test_school_year_bounds_half_open(self):
        """Test bounds run from July 1 to the next July 1."""
        assert school_year_bounds(2024) == (date(2024, 7, 1), date(2025, 7, 1))

    def test_custom_start_month(self):
        """Test a different start month moves the boundary."""
        assert school_year_for(date(2025, 8, 15), start_month=9) == 2024
        assert school_year_bounds(2024, start_month=9) == (date(2024, 9, 1), date(2025, 9, 1))

    def test_current_school_year(self):
        """Test the current school year uses the given day."""
        assert current_school_year(date(2026, 2, 1)) == 2025

    def test_school_year_label(self):
        """Test school year labels."""
        assert school_year_label(2024) == "2024-2025"
