"""
Shared fixtures for Homeschool Tracker tests.

Everything runs against InMemoryStorage unless a test needs real files,
in which case it uses pytest's tmp_path.
"""

import time
from datetime import date

import pytest

from homeschool_tracker.audit import AuditLogger
from homeschool_tracker.config import get_settings
from homeschool_tracker.models import (
    Category,
    EntryTemplate,
    Location,
    Requirements,
    StudentDraft,
    SubjectDraft,
    TimeEntryDraft,
)
from homeschool_tracker.services.storage import (
    InMemoryStorage,
    StorageReadError,
    StorageWriteError,
)
from homeschool_tracker.store import AppStore


STORAGE_KEY = "test-state"


class FailingWriteStorage(InMemoryStorage):
    """Storage whose writes always fail, like a full browser quota."""

    def set(self, key, value):
        raise StorageWriteError("quota exceeded")


class FailingReadStorage(InMemoryStorage):
    """Storage whose reads always fail."""

    def get(self, key):
        raise StorageReadError("disk unreadable")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the developer's environment and cached settings."""
    for name in (
        "HOMESCHOOL_STORAGE_BACKEND",
        "HOMESCHOOL_STORAGE_DATA_DIR",
        "HOMESCHOOL_STORAGE_KEY",
        "HOMESCHOOL_LOG_LEVEL",
        "HOMESCHOOL_VOLUNTEER_SUBJECT_NAME",
        "HOMESCHOOL_VOLUNTEER_SUBJECT_COLOR",
        "HOMESCHOOL_SCHOOL_YEAR_START_MONTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pacific_time(monkeypatch):
    """Run the test with a negative UTC offset as the local timezone."""
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=50)


@pytest.fixture
def store(storage, audit_logger):
    return AppStore(storage, storage_key=STORAGE_KEY, audit_logger=audit_logger)


@pytest.fixture
def student(store):
    return store.add_student(StudentDraft(
        name="Ada",
        grade="5th",
        requirements=Requirements(total_hours=1000, core_hours=600, home_hours=400),
    ))


@pytest.fixture
def other_student(store):
    return store.add_student(StudentDraft(name="Grace", grade="3rd"))


@pytest.fixture
def math(store):
    return store.add_subject(SubjectDraft(name="Math", color="#4CAF50", category=Category.CORE))


@pytest.fixture
def art(store):
    return store.add_subject(SubjectDraft(name="Art", color="#FF9800", category=Category.NON_CORE))


@pytest.fixture
def entry_draft(student, math):
    return TimeEntryDraft(
        student_id=student.id,
        subject_id=math.id,
        date=date(2025, 1, 6),
        duration=45,
        location=Location.HOME,
        notes="Fractions",
    )


@pytest.fixture
def template(math):
    return EntryTemplate(subject_id=math.id, duration=30, tags=["Recurring"])


@pytest.fixture
def failing_write_storage():
    return FailingWriteStorage()


@pytest.fixture
def failing_read_storage():
    return FailingReadStorage()
