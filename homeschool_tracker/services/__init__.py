"""Services package."""

from homeschool_tracker.services.storage import (
    InMemoryStorage,
    InvalidKeyError,
    KeyValueStorage,
    LocalFileStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryStorage",
    "InvalidKeyError",
    "KeyValueStorage",
    "LocalFileStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
