"""Tests for the recurring entry generator."""

import pytest
from datetime import date, datetime, timedelta

from homeschool_tracker.models import (
    EntryTemplate,
    Location,
    RecurringPattern,
    RecurringRequest,
    RepeatMode,
)
from homeschool_tracker.recurrence import generate_recurring_entries


MONDAY = date(2025, 1, 6)
WEDNESDAY = 3


def request(**overrides):
    fields = dict(
        student_id="s1",
        start_date=MONDAY,
        pattern=RecurringPattern.DAILY_WEEKDAYS,
        repeat_mode=RepeatMode.WEEKS,
        weeks=1,
        template=EntryTemplate(subject_id="m1", duration=30),
    )
    fields.update(overrides)
    return RecurringRequest(**fields)


def days(drafts):
    return [draft.date.date() for draft in drafts]


class TestDailyWeekdays:
    """Tests for the daily-weekdays pattern."""

    def test_one_week_from_monday(self):
        """Test one week from Monday gives Monday through Friday."""
        drafts = generate_recurring_entries(request())
        assert days(drafts) == [date(2025, 1, d) for d in range(6, 11)]
        assert len({d.recurring_series_id for d in drafts}) == 1
        assert all(d.is_recurring for d in drafts)
        assert all(d.recurring_pattern == RecurringPattern.DAILY_WEEKDAYS for d in drafts)
        assert all(d.recurring_day is None for d in drafts)

    def test_two_weeks(self):
        """Test the week budget counts completed weeks."""
        drafts = generate_recurring_entries(request(weeks=2))
        assert len(drafts) == 10
        assert days(drafts)[-1] == date(2025, 1, 17)

    def test_mid_week_start(self):
        """Test a week completes at the first Sunday after an entry."""
        drafts = generate_recurring_entries(request(start_date=date(2025, 1, 8)))
        assert days(drafts) == [date(2025, 1, 8), date(2025, 1, 9), date(2025, 1, 10)]

    def test_weekend_start_skips_empty_week(self):
        """Test a Sunday before any entry does not complete a week."""
        drafts = generate_recurring_entries(request(start_date=date(2025, 1, 11)))
        assert days(drafts) == [date(2025, 1, d) for d in range(13, 18)]

    def test_until_date(self):
        """Test the end date is inclusive and weekends are skipped."""
        drafts = generate_recurring_entries(request(
            repeat_mode=RepeatMode.UNTIL_DATE,
            weeks=None,
            end_date=date(2025, 1, 15),
        ))
        assert days(drafts) == [
            date(2025, 1, 6), date(2025, 1, 7), date(2025, 1, 8), date(2025, 1, 9),
            date(2025, 1, 10), date(2025, 1, 13), date(2025, 1, 14), date(2025, 1, 15),
        ]

    def test_dates_are_local_midnight(self):
        """Test generated dates are naive local midnights."""
        draft = generate_recurring_entries(request())[0]
        assert draft.date == datetime(2025, 1, 6)


class TestWeekly:
    """Tests for the weekly pattern."""

    def test_advances_to_target_weekday(self):
        """Test Wednesday from a Monday start gives three Wednesdays."""
        drafts = generate_recurring_entries(request(
            pattern=RecurringPattern.WEEKLY,
            weekday=WEDNESDAY,
            weeks=3,
        ))
        assert days(drafts) == [date(2025, 1, 8), date(2025, 1, 15), date(2025, 1, 22)]
        assert all(d.recurring_day == WEDNESDAY for d in drafts)
        assert all(d.recurring_pattern == RecurringPattern.WEEKLY for d in drafts)
        assert len({d.recurring_series_id for d in drafts}) == 1

    def test_start_on_target_weekday_is_inclusive(self):
        """Test the start date counts when it is already the target weekday."""
        drafts = generate_recurring_entries(request(
            start_date=date(2025, 1, 8),
            pattern=RecurringPattern.WEEKLY,
            weekday=WEDNESDAY,
            weeks=2,
        ))
        assert days(drafts) == [date(2025, 1, 8), date(2025, 1, 15)]

    def test_wraps_to_next_week(self):
        """Test a target weekday earlier in the week moves to next week."""
        drafts = generate_recurring_entries(request(
            start_date=date(2025, 1, 8),
            pattern=RecurringPattern.WEEKLY,
            weekday=1,
            weeks=1,
        ))
        assert days(drafts) == [date(2025, 1, 13)]

    def test_until_date(self):
        """Test the weekly series stops after the end date."""
        drafts = generate_recurring_entries(request(
            pattern=RecurringPattern.WEEKLY,
            weekday=WEDNESDAY,
            repeat_mode=RepeatMode.UNTIL_DATE,
            weeks=None,
            end_date=date(2025, 1, 22),
        ))
        assert days(drafts) == [date(2025, 1, 8), date(2025, 1, 15), date(2025, 1, 22)]

    def test_default_weekday(self):
        """Test a weekly request without a weekday uses the start date's."""
        drafts = generate_recurring_entries(request(pattern=RecurringPattern.WEEKLY, weeks=2))
        assert days(drafts) == [MONDAY, MONDAY + timedelta(weeks=1)]
        assert drafts[0].recurring_day == 1


class TestStopConditions:
    """Tests for requests without a usable stop condition."""

    def test_until_date_without_end_date(self):
        """Test until-date mode with no end date yields nothing."""
        assert generate_recurring_entries(request(
            repeat_mode=RepeatMode.UNTIL_DATE,
            end_date=None,
        )) == []

    def test_weeks_without_budget(self):
        """Test weeks mode with no budget yields nothing."""
        assert generate_recurring_entries(request(weeks=None)) == []

    @pytest.mark.parametrize("weeks", [0, -1])
    def test_non_positive_budget(self, weeks):
        """Test a zero or negative week budget yields nothing."""
        assert generate_recurring_entries(request(weeks=weeks)) == []
        assert generate_recurring_entries(request(
            pattern=RecurringPattern.WEEKLY, weekday=WEDNESDAY, weeks=weeks,
        )) == []

    def test_end_before_start(self):
        """Test an end date before the start date yields nothing."""
        assert generate_recurring_entries(request(
            repeat_mode=RepeatMode.UNTIL_DATE,
            end_date=MONDAY - timedelta(days=1),
        )) == []

    def test_until_date_ignores_week_budget(self):
        """Test only the active stop condition is used."""
        drafts = generate_recurring_entries(request(
            repeat_mode=RepeatMode.UNTIL_DATE,
            weeks=1,
            end_date=date(2025, 1, 17),
        ))
        assert len(drafts) == 10


class TestTemplate:
    """Tests for fields stamped onto every occurrence."""

    def test_template_fields_copied(self):
        """Test subject, duration, location, notes and tags are stamped."""
        template = EntryTemplate(
            subject_id="m1",
            duration=45,
            location=Location.AWAY,
            notes="Co-op",
            tags=["Group"],
        )
        drafts = generate_recurring_entries(request(template=template))
        for draft in drafts:
            assert draft.student_id == "s1"
            assert draft.subject_id == "m1"
            assert draft.duration == 45
            assert draft.location == Location.AWAY
            assert draft.notes == "Co-op"
            assert draft.tags == ["Group"]

    def test_each_call_gets_new_series(self):
        """Test separate requests produce distinct series ids."""
        first = generate_recurring_entries(request())
        second = generate_recurring_entries(request())
        assert first[0].recurring_series_id != second[0].recurring_series_id
