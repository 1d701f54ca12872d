"""Recurring time-entry generation."""

from homeschool_tracker.recurrence.generator import generate_recurring_entries

__all__ = ["generate_recurring_entries"]
