"""Application state store: transitions, persistence and migration."""

from homeschool_tracker.store.app_store import AppStore
from homeschool_tracker.store.migration import MigrationReport, migrate_document
from homeschool_tracker.store.persistence import (
    default_state,
    deserialize_state,
    load_state,
    save_state,
    serialize_state,
)
from homeschool_tracker.store.reducer import UnknownIntentError, apply_update, reduce

__all__ = [
    "AppStore",
    "MigrationReport",
    "UnknownIntentError",
    "apply_update",
    "default_state",
    "deserialize_state",
    "load_state",
    "migrate_document",
    "reduce",
    "save_state",
    "serialize_state",
]
