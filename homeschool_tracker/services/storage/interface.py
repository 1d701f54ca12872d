"""
Abstract Storage Interface

DESIGN DECISION: The store persists one text blob under one key through
this interface. Providers:
1. LocalFileStorage for a per-user data directory
2. InMemoryStorage for tests and throwaway sessions

The interface is intentionally tiny - synchronous get/set by key, the
same contract as a browser's local storage.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for a synchronous key-value text store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            StorageWriteError: If the value cannot be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass

    def contains(self, key: str) -> bool:
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored value could not be read."""
    pass


class StorageWriteError(StorageError):
    """Value could not be written (permissions, disk full, quota)."""
    pass


class InvalidKeyError(StorageError):
    """Key cannot be used with this provider."""
    pass
