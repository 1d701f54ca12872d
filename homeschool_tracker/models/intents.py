"""
Intent Models

An intent describes one requested change to application state. The store
applies intents one at a time through a pure transition function.

Usage:
    store.dispatch(AddStudent(student=StudentDraft(name="Ada")))
    store.dispatch(DeleteSubject(id=subject.id))
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

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


class AddStudent(BaseModel):
    type: Literal["ADD_STUDENT"] = "ADD_STUDENT"
    student: StudentDraft


class UpdateStudent(BaseModel):
    type: Literal["UPDATE_STUDENT"] = "UPDATE_STUDENT"
    id: str
    updates: StudentUpdate


class DeleteStudent(BaseModel):
    """Removes the student and, in the same transition, all of their time entries."""
    type: Literal["DELETE_STUDENT"] = "DELETE_STUDENT"
    id: str


class AddSubject(BaseModel):
    type: Literal["ADD_SUBJECT"] = "ADD_SUBJECT"
    subject: SubjectDraft


class UpdateSubject(BaseModel):
    type: Literal["UPDATE_SUBJECT"] = "UPDATE_SUBJECT"
    id: str
    updates: SubjectUpdate


class DeleteSubject(BaseModel):
    """Removes the subject and, in the same transition, all time entries for it."""
    type: Literal["DELETE_SUBJECT"] = "DELETE_SUBJECT"
    id: str


class AddTimeEntry(BaseModel):
    type: Literal["ADD_TIME_ENTRY"] = "ADD_TIME_ENTRY"
    entry: TimeEntryDraft


class UpdateTimeEntry(BaseModel):
    type: Literal["UPDATE_TIME_ENTRY"] = "UPDATE_TIME_ENTRY"
    id: str
    updates: TimeEntryUpdate


class DeleteTimeEntry(BaseModel):
    type: Literal["DELETE_TIME_ENTRY"] = "DELETE_TIME_ENTRY"
    id: str


AppIntent = Annotated[
    Union[
        AddStudent,
        UpdateStudent,
        DeleteStudent,
        AddSubject,
        UpdateSubject,
        DeleteSubject,
        AddTimeEntry,
        UpdateTimeEntry,
        DeleteTimeEntry,
    ],
    Field(discriminator="type"),
]


class TransitionResult(BaseModel):
    """
    Outcome of applying one intent.

    `affected` counts every entity added, changed or removed, including
    time entries removed by a cascading delete. Zero means the intent was
    a no-op (for example an unknown id).
    """

    state: AppState
    affected: int = Field(default=0, ge=0)
    created: Optional[Union[Student, Subject, TimeEntry]] = Field(
        default=None,
        description="The new entity for add intents"
    )
    cascaded: int = Field(
        default=0,
        ge=0,
        description="Time entries removed because their student or subject was deleted"
    )

    @property
    def changed(self) -> bool:
        return self.affected > 0
