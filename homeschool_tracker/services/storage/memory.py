"""In-memory key-value storage."""

from typing import Optional

from homeschool_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorage,
)


class InMemoryStorage(KeyValueStorage):
    """
    Dict-backed storage.

    Nothing survives the process. Used by tests and by the 'memory'
    storage backend.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not key:
            raise InvalidKeyError("Storage key must not be empty")
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._data)
