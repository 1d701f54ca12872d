"""
Application Store

AppStore owns the single AppState for a session. All changes go through
dispatch(), which applies the pure transition, persists the result and
records an audit event.

DESIGN DECISION: The store is an explicit object passed to whatever needs
it. There is no module-level instance.
"""

from typing import Optional

from homeschool_tracker.audit import AuditLogger
from homeschool_tracker.config import get_settings
from homeschool_tracker.models.audit import AuditEventBuilder, AuditEventType
from homeschool_tracker.models.intents import (
    AddStudent,
    AddSubject,
    AddTimeEntry,
    AppIntent,
    DeleteStudent,
    DeleteSubject,
    DeleteTimeEntry,
    TransitionResult,
    UpdateStudent,
    UpdateSubject,
    UpdateTimeEntry,
)
from homeschool_tracker.models.records import (
    AppState,
    Student,
    StudentDraft,
    StudentUpdate,
    Subject,
    SubjectDraft,
    SubjectUpdate,
    TimeEntry,
    TimeEntryDraft,
    TimeEntryUpdate,
)
from homeschool_tracker.services.storage import KeyValueStorage
from homeschool_tracker.store.persistence import load_state, save_state
from homeschool_tracker.store.reducer import reduce


# intent type -> (audit event type, entity type)
_AUDIT_EVENTS = {
    AddStudent: (AuditEventType.STUDENT_ADDED, "student"),
    UpdateStudent: (AuditEventType.STUDENT_UPDATED, "student"),
    DeleteStudent: (AuditEventType.STUDENT_DELETED, "student"),
    AddSubject: (AuditEventType.SUBJECT_ADDED, "subject"),
    UpdateSubject: (AuditEventType.SUBJECT_UPDATED, "subject"),
    DeleteSubject: (AuditEventType.SUBJECT_DELETED, "subject"),
    AddTimeEntry: (AuditEventType.TIME_ENTRY_ADDED, "time_entry"),
    UpdateTimeEntry: (AuditEventType.TIME_ENTRY_UPDATED, "time_entry"),
    DeleteTimeEntry: (AuditEventType.TIME_ENTRY_DELETED, "time_entry"),
}


class AppStore:
    """
    Holds application state and applies intents to it.

    Usage:
        store = AppStore(LocalFileStorage("~/.homeschool-tracker"))
        ada = store.add_student(StudentDraft(name="Ada", grade="5th"))
        store.update_student(ada.id, StudentUpdate(grade="6th"))
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the store and load persisted state.

        Args:
            storage: Key-value provider holding the state blob
            storage_key: Key to use; defaults to the configured key
            audit_logger: Where diagnostics go; a private logger if None
        """
        self._storage = storage
        self._key = storage_key or get_settings().storage.key
        self._audit_logger = audit_logger or AuditLogger()
        self._state = load_state(self._storage, self._key, self._audit_logger)
        self._last_save_ok = True

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def storage_key(self) -> str:
        return self._key

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def last_save_ok(self) -> bool:
        """False if the most recent persist after a transition failed."""
        return self._last_save_ok

    def dispatch(self, intent: AppIntent) -> TransitionResult:
        """
        Apply an intent, persist the new state and audit the change.

        A failed persist does not undo the transition; the in-memory state
        stays current and the failure is logged.
        """
        result = reduce(self._state, intent)
        self._state = result.state
        self._last_save_ok = save_state(self._storage, self._key, self._state, self._audit_logger)
        self._audit(intent, result)
        return result

    def reload(self) -> AppState:
        """Discard in-memory state and read it again from storage."""
        self._state = load_state(self._storage, self._key, self._audit_logger)
        return self._state

    # -------------------------------------------------------------------------
    # Students
    # -------------------------------------------------------------------------

    def add_student(self, student: StudentDraft) -> Student:
        return self.dispatch(AddStudent(student=student)).created

    def update_student(self, student_id: str, updates: StudentUpdate) -> int:
        return self.dispatch(UpdateStudent(id=student_id, updates=updates)).affected

    def delete_student(self, student_id: str) -> int:
        """Delete a student and their time entries; returns entities removed."""
        return self.dispatch(DeleteStudent(id=student_id)).affected

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._state.find_student(student_id)

    # -------------------------------------------------------------------------
    # Subjects
    # -------------------------------------------------------------------------

    def add_subject(self, subject: SubjectDraft) -> Subject:
        return self.dispatch(AddSubject(subject=subject)).created

    def update_subject(self, subject_id: str, updates: SubjectUpdate) -> int:
        return self.dispatch(UpdateSubject(id=subject_id, updates=updates)).affected

    def delete_subject(self, subject_id: str) -> int:
        """Delete a subject and its time entries; returns entities removed."""
        return self.dispatch(DeleteSubject(id=subject_id)).affected

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self._state.find_subject(subject_id)

    def find_subject_by_name(self, name: str) -> Optional[Subject]:
        return next((s for s in self._state.subjects if s.name == name), None)

    # -------------------------------------------------------------------------
    # Time entries
    # -------------------------------------------------------------------------

    def add_time_entry(self, entry: TimeEntryDraft) -> TimeEntry:
        return self.dispatch(AddTimeEntry(entry=entry)).created

    def update_time_entry(self, entry_id: str, updates: TimeEntryUpdate) -> int:
        return self.dispatch(UpdateTimeEntry(id=entry_id, updates=updates)).affected

    def delete_time_entry(self, entry_id: str) -> int:
        return self.dispatch(DeleteTimeEntry(id=entry_id)).affected

    def get_time_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return self._state.find_time_entry(entry_id)

    # -------------------------------------------------------------------------

    def _audit(self, intent: AppIntent, result: TransitionResult) -> None:
        event_type, entity_type = _AUDIT_EVENTS[type(intent)]
        entity_id = result.created.id if result.created is not None else intent.id
        if not result.changed:
            self._audit_logger.log(AuditEventBuilder.intent_no_op(intent.type, entity_id))
            return
        self._audit_logger.log(AuditEventBuilder.entity_changed(
            event_type,
            entity_type,
            entity_id,
            cascaded=result.cascaded,
        ))
