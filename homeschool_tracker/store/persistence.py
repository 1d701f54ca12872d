"""
State Persistence

The whole AppState is one JSON document stored under one key.

- save_state never raises: a failed write is logged and reported as False;
  the caller keeps its in-memory state
- load_state never raises: a missing key gives the empty default state, an
  unreadable or malformed document gives the empty default state and a
  logged diagnostic
"""

import json
from typing import Optional

from homeschool_tracker.audit import AuditLogger, get_logger
from homeschool_tracker.models.audit import AuditEvent, AuditEventBuilder
from homeschool_tracker.models.raw import RawStateDocument
from homeschool_tracker.models.records import AppState
from homeschool_tracker.services.storage import KeyValueStorage
from homeschool_tracker.store.migration import MigrationReport, migrate_document


def default_state() -> AppState:
    """Empty state: no students, subjects or time entries."""
    return AppState()


def serialize_state(state: AppState) -> str:
    """Render state as the persisted JSON document (camelCase keys)."""
    return json.dumps(
        state.model_dump(mode="json", by_alias=True, exclude_none=True),
        ensure_ascii=False,
    )


def deserialize_state(text: str) -> tuple[AppState, MigrationReport]:
    """
    Parse a persisted JSON document and migrate it to canonical state.

    Raises:
        ValueError: Malformed JSON, a non-object document or an invalid record
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Persisted state must be a JSON object, got {type(data).__name__}")
    document = RawStateDocument.model_validate(data)
    return migrate_document(document)


def load_state(
    storage: KeyValueStorage,
    key: str,
    audit_logger: Optional[AuditLogger] = None,
) -> AppState:
    """
    Read state from storage, falling back to the empty default state.

    Never raises; failures go to the audit log.
    """
    try:
        text = storage.get(key)
        if text is None:
            return default_state()
        state, report = deserialize_state(text)
    except Exception as e:
        _record(audit_logger, AuditEventBuilder.state_load_failed(key, e))
        return default_state()

    if report.migrated:
        _record(audit_logger, AuditEventBuilder.state_migrated(key, report.changes()))
    _record(audit_logger, AuditEventBuilder.state_loaded(key, {
        "students": len(state.students),
        "subjects": len(state.subjects),
        "time_entries": len(state.time_entries),
    }))
    return state


def save_state(
    storage: KeyValueStorage,
    key: str,
    state: AppState,
    audit_logger: Optional[AuditLogger] = None,
) -> bool:
    """
    Write the full state under `key`.

    Returns:
        True if the write succeeded. A failure is logged, never raised.
    """
    try:
        storage.set(key, serialize_state(state))
        return True
    except Exception as e:
        _record(audit_logger, AuditEventBuilder.state_save_failed(key, e))
        return False


def _record(audit_logger: Optional[AuditLogger], event: AuditEvent) -> None:
    if audit_logger is not None:
        audit_logger.log(event)
    else:
        log_method = getattr(get_logger(__name__), event.severity.value)
        log_method("audit_event", **event.to_log_dict())
