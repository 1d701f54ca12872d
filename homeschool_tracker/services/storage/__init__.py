"""
Storage Services Package

Provides the key-value storage interface and its implementations.
The application state store depends only on the interface.
"""

from homeschool_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from homeschool_tracker.services.storage.local_file import LocalFileStorage
from homeschool_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "InvalidKeyError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
]
