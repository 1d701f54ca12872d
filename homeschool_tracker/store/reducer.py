"""
State Transitions

reduce(state, intent) is the only way application state changes. It is a
pure function of its inputs apart from id and timestamp generation for new
entities; it performs no I/O and never raises for unknown ids.

Semantics:
- Add: append with a fresh id and created_at
- Update: shallow merge of the fields explicitly set on the update model
- Delete: remove; deleting a student or subject also removes every time
  entry that references it
- Unknown id: state returned unchanged with affected == 0
"""

from typing import TypeVar

from pydantic import BaseModel

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
    Subject,
    TimeEntry,
    utc_now,
)
from homeschool_tracker.utils.ids import generate_id


EntityT = TypeVar("EntityT", Student, Subject, TimeEntry)


class UnknownIntentError(TypeError):
    """reduce() was handed something that is not an intent model."""
    pass


def reduce(state: AppState, intent: AppIntent) -> TransitionResult:
    """
    Apply one intent and return the next state.

    Args:
        state: Current application state (not modified)
        intent: The change to apply

    Returns:
        TransitionResult with the next state and how many entities changed

    Raises:
        UnknownIntentError: If `intent` is not one of the intent models
    """
    if isinstance(intent, AddStudent):
        student = _create(Student, intent.student)
        return TransitionResult(
            state=state.model_copy(update={"students": [*state.students, student]}),
            affected=1,
            created=student,
        )
    elif isinstance(intent, UpdateStudent):
        students, affected = _merge_into(state.students, intent.id, intent.updates)
        return _result(state, affected, students=students)
    elif isinstance(intent, DeleteStudent):
        students = [s for s in state.students if s.id != intent.id]
        entries = [e for e in state.time_entries if e.student_id != intent.id]
        return _deletion_result(state, students=students, time_entries=entries)

    elif isinstance(intent, AddSubject):
        subject = _create(Subject, intent.subject)
        return TransitionResult(
            state=state.model_copy(update={"subjects": [*state.subjects, subject]}),
            affected=1,
            created=subject,
        )
    elif isinstance(intent, UpdateSubject):
        subjects, affected = _merge_into(state.subjects, intent.id, intent.updates)
        return _result(state, affected, subjects=subjects)
    elif isinstance(intent, DeleteSubject):
        subjects = [s for s in state.subjects if s.id != intent.id]
        entries = [e for e in state.time_entries if e.subject_id != intent.id]
        return _deletion_result(state, subjects=subjects, time_entries=entries)

    elif isinstance(intent, AddTimeEntry):
        entry = _create(TimeEntry, intent.entry)
        return TransitionResult(
            state=state.model_copy(update={"time_entries": [*state.time_entries, entry]}),
            affected=1,
            created=entry,
        )
    elif isinstance(intent, UpdateTimeEntry):
        entries, affected = _merge_into(state.time_entries, intent.id, intent.updates)
        return _result(state, affected, time_entries=entries)
    elif isinstance(intent, DeleteTimeEntry):
        entries = [e for e in state.time_entries if e.id != intent.id]
        return _deletion_result(state, time_entries=entries)

    raise UnknownIntentError(f"Not an intent: {type(intent).__name__}")


def _create(entity_type: type[EntityT], draft: BaseModel) -> EntityT:
    """Build a stored entity from a draft with a fresh id and timestamp."""
    fields = {name: getattr(draft, name) for name in type(draft).model_fields}
    return entity_type(**fields, id=generate_id(), created_at=utc_now())


def apply_update(entity: EntityT, updates: BaseModel) -> EntityT:
    """
    Shallow-merge the explicitly set fields of `updates` onto `entity`.

    A field left unset is kept; a field set to None is cleared. Nested
    values (requirements, subject_curriculum, tags) are replaced whole.
    """
    changes = {name: getattr(updates, name) for name in updates.model_fields_set}
    if not changes:
        return entity
    return entity.model_copy(update=changes)


def _merge_into(
    items: list[EntityT],
    entity_id: str,
    updates: BaseModel,
) -> tuple[list[EntityT], int]:
    affected = 0
    merged = []
    for item in items:
        if item.id == entity_id:
            item = apply_update(item, updates)
            affected += 1
        merged.append(item)
    return merged, affected


def _result(state: AppState, affected: int, **collections: list) -> TransitionResult:
    if not affected:
        return TransitionResult(state=state, affected=0)
    return TransitionResult(state=state.model_copy(update=collections), affected=affected)


def _deletion_result(
    state: AppState,
    **collections: list,
) -> TransitionResult:
    """Count what a delete removed; cascaded entries count towards affected."""
    removed = sum(
        len(getattr(state, name)) - len(remaining)
        for name, remaining in collections.items()
    )
    cascaded = 0
    if "time_entries" in collections and len(collections) > 1:
        cascaded = len(state.time_entries) - len(collections["time_entries"])
    return TransitionResult(
        state=state.model_copy(update=collections) if removed else state,
        affected=removed,
        cascaded=cascaded,
    )

