"""
Homeschool Tracker - Source Package

Record keeping for a homeschooling household: students, subjects,
study-time entries (including recurring series) and progress against
annual-hour requirements.

DESIGN PRINCIPLES:
1. One owned state object, changed only through dispatched intents
2. State transitions are pure; persistence happens after the transition
3. Legacy data is migrated on load, never rejected for old field names
4. Entry dates live on the local calendar
5. Storage provider is swappable
"""

__version__ = "1.0.0"
__author__ = "Homeschool Tracker Team"
