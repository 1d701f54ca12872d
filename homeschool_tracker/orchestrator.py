"""
Main Orchestrator for Homeschool Tracker

This module ties together the store, the recurring generator and the
audit log, and defines the end-to-end flows for:
1. Time logging (single entry, recurring series, volunteer hours)
2. Roster management (students and their annual requirements)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Every change goes through AppStore.dispatch, one intent per entity
- Startup provisioning happens once, here, never as a side effect of a read
- Every flow step is audited

Recurring batches are not atomic: each generated entry is its own
transition, so a failure part way through leaves a shorter series.
"""

from datetime import date
from typing import Optional

from homeschool_tracker.audit import AuditLogger, configure_logging
from homeschool_tracker.config import get_settings
from homeschool_tracker.models.audit import AuditEventBuilder
from homeschool_tracker.models.recurrence import RecurringRequest
from homeschool_tracker.models.records import (
    Category,
    Location,
    Requirements,
    Student,
    StudentDraft,
    StudentUpdate,
    Subject,
    SubjectDraft,
    TimeEntry,
    TimeEntryDraft,
    TimeEntryUpdate,
)
from homeschool_tracker.recurrence import generate_recurring_entries
from homeschool_tracker.reports import ReportBuilder
from homeschool_tracker.services.storage import (
    InMemoryStorage,
    KeyValueStorage,
    LocalFileStorage,
)
from homeschool_tracker.store import AppStore


def ensure_volunteer_subject(
    store: AppStore,
    name: Optional[str] = None,
    color: Optional[str] = None,
) -> Subject:
    """
    Make sure the volunteer-hours subject exists.

    Idempotent: returns the existing subject when one has the configured
    name, otherwise adds it as Non-Core.
    """
    settings = get_settings().app
    name = name or settings.volunteer_subject_name
    color = color or settings.volunteer_subject_color

    existing = store.find_subject_by_name(name)
    if existing is not None:
        return existing

    subject = store.add_subject(SubjectDraft(
        name=name,
        color=color,
        category=Category.NON_CORE,
    ))
    store.audit_logger.log(AuditEventBuilder.volunteer_subject_provisioned(subject.id, name))
    return subject


def format_volunteer_notes(organization: str, activity: str, notes: Optional[str] = None) -> str:
    """e.g. 'Food Bank - Sorting: morning shift'."""
    text = f"{organization} - {activity}"
    if notes:
        text += f": {notes}"
    return text


def parse_volunteer_notes(text: Optional[str]) -> tuple[str, str, str]:
    """Split volunteer notes back into (organization, activity, notes)."""
    organization, _, rest = (text or "").partition(" - ")
    activity, _, notes = rest.partition(": ")
    return organization, activity, notes


class TimeLogFlow:
    """
    Handles logging study time.

    Flow:
    1. Build drafts (one entry, a generated series, or a volunteer entry)
    2. Dispatch each draft as its own AddTimeEntry
    3. Audit series creation
    """

    def __init__(self, store: AppStore, volunteer_subject_name: Optional[str] = None):
        self._store = store
        self._volunteer_subject_name = (
            volunteer_subject_name or get_settings().app.volunteer_subject_name
        )

    @property
    def store(self) -> AppStore:
        return self._store

    def log_entry(self, draft: TimeEntryDraft) -> TimeEntry:
        return self._store.add_time_entry(draft)

    def log_recurring(
        self,
        student_ids: list[str],
        request: RecurringRequest,
    ) -> dict[str, list[TimeEntry]]:
        """
        Generate and store one recurring series per student.

        Each student gets an independent series id. The request's own
        student_id is ignored.

        Returns:
            Student id -> entries created for that student
        """
        created: dict[str, list[TimeEntry]] = {}

        for student_id in student_ids:
            drafts = generate_recurring_entries(request.for_student(student_id))
            entries = [self._store.add_time_entry(draft) for draft in drafts]
            created[student_id] = entries

            if entries:
                self._store.audit_logger.log(AuditEventBuilder.recurring_series_created(
                    series_id=entries[0].recurring_series_id,
                    student_id=student_id,
                    pattern=request.pattern.value,
                    entry_count=len(entries),
                ))

        return created

    def log_volunteer_hours(
        self,
        student_id: str,
        day: date,
        hours: float,
        minutes: int,
        organization: str,
        activity: str,
        notes: Optional[str] = None,
    ) -> TimeEntry:
        """Log volunteer time as an Away entry on the volunteer subject."""
        subject = ensure_volunteer_subject(self._store, name=self._volunteer_subject_name)
        return self._store.add_time_entry(TimeEntryDraft(
            student_id=student_id,
            subject_id=subject.id,
            date=day,
            duration=_volunteer_minutes(hours, minutes),
            location=Location.AWAY,
            notes=format_volunteer_notes(organization, activity, notes),
        ))

    def update_volunteer_hours(
        self,
        entry_id: str,
        student_id: str,
        day: date,
        hours: float,
        minutes: int,
        organization: str,
        activity: str,
        notes: Optional[str] = None,
    ) -> int:
        """Rewrite an existing volunteer entry; returns the affected count."""
        subject = ensure_volunteer_subject(self._store, name=self._volunteer_subject_name)
        return self._store.update_time_entry(entry_id, TimeEntryUpdate(
            student_id=student_id,
            subject_id=subject.id,
            date=day,
            duration=_volunteer_minutes(hours, minutes),
            location=Location.AWAY,
            notes=format_volunteer_notes(organization, activity, notes),
        ))


def _volunteer_minutes(hours: float, minutes: int) -> int:
    return round(hours * 60) + minutes


class RosterFlow:
    """
    Handles students and their annual requirements.
    """

    def __init__(self, store: AppStore):
        self._store = store

    @property
    def store(self) -> AppStore:
        return self._store

    def add_student(self, draft: StudentDraft) -> Student:
        """
        Add a student.

        A draft without requirements inherits a copy of the first existing
        student's requirements.
        """
        if draft.requirements is None and self._store.state.students:
            inherited = self._store.state.students[0].requirements
            if inherited is not None:
                draft = draft.model_copy(update={"requirements": inherited.model_copy()})
        return self._store.add_student(draft)

    def set_requirements(self, student_id: str, requirements: Optional[Requirements]) -> int:
        """Replace one student's requirements; None clears them."""
        return self._store.update_student(student_id, StudentUpdate(requirements=requirements))

    def apply_requirements_to_all(self, requirements: Requirements) -> int:
        """Give every student the same requirements; returns students updated."""
        updated = 0
        for student in list(self._store.state.students):
            updated += self.set_requirements(student.id, requirements.model_copy())
        return updated


def create_report_builder(store: AppStore, today: Optional[date] = None) -> ReportBuilder:
    """ReportBuilder over the store's current state using configured settings."""
    settings = get_settings().app
    return ReportBuilder(
        store.state,
        today=today,
        school_year_start_month=settings.school_year_start_month,
        volunteer_subject_name=settings.volunteer_subject_name,
    )


def create_app_components(
    storage: Optional[KeyValueStorage] = None,
) -> tuple[AppStore, TimeLogFlow, RosterFlow]:
    """
    Factory function to create all application components.

    Args:
        storage: Key-value provider to use. When None, the configured
                 backend is built (a data directory, or memory).

    Returns:
        (store, time_log_flow, roster_flow)
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    if storage is None:
        if settings.storage.backend == "memory":
            storage = InMemoryStorage()
        else:
            storage = LocalFileStorage(settings.storage.data_dir)

    audit_logger = AuditLogger(history_size=settings.app.audit_history_size)
    store = AppStore(storage, storage_key=settings.storage.key, audit_logger=audit_logger)

    # Startup provisioning
    ensure_volunteer_subject(store)

    time_log_flow = TimeLogFlow(store)
    roster_flow = RosterFlow(store)

    return store, time_log_flow, roster_flow
