"""
Local File Storage Implementation

Stores each key as one UTF-8 file inside a data directory, the desktop
equivalent of a browser profile's local storage.

TRADEOFFS:
- One file per key; fine for a single state blob
- Writes go to a temporary file first and are moved into place with
  os.replace, so a crash mid-write leaves the previous value intact
- No locking; one process owns the directory
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from homeschool_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")
FILE_SUFFIX = ".json"


class LocalFileStorage(KeyValueStorage):
    """File-per-key storage under a single directory."""

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path holding a key's value."""
        if not key or key in {".", ".."}:
            raise InvalidKeyError(f"Invalid storage key: {key!r}")
        return self._directory / (_UNSAFE_KEY_CHARS.sub("_", key) + FILE_SUFFIX)

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory,
                prefix=f".{path.stem}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}")

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to delete {path}: {e}")
