"""Tests for key-value storage providers."""

import pytest

from homeschool_tracker.services.storage import (
    InMemoryStorage,
    InvalidKeyError,
    LocalFileStorage,
    StorageReadError,
    StorageWriteError,
)


class TestInMemoryStorage:
    """Tests for the dict-backed provider."""

    def test_get_missing_key(self):
        """Test a missing key reads as None."""
        assert InMemoryStorage().get("state") is None

    def test_set_then_get(self):
        """Test a value can be stored and read back."""
        storage = InMemoryStorage()
        storage.set("state", "{}")
        assert storage.get("state") == "{}"
        assert storage.contains("state") is True

    def test_initial_values(self):
        """Test the provider can be seeded."""
        storage = InMemoryStorage({"a": "1"})
        assert storage.keys() == ["a"]

    def test_delete(self):
        """Test delete reports whether the key existed."""
        storage = InMemoryStorage({"a": "1"})
        assert storage.delete("a") is True
        assert storage.delete("a") is False
        assert storage.contains("a") is False

    def test_empty_key_rejected(self):
        """Test an empty key cannot be written."""
        with pytest.raises(InvalidKeyError):
            InMemoryStorage().set("", "x")


class TestLocalFileStorage:
    """Tests for the file-per-key provider."""

    def test_get_missing_key(self, tmp_path):
        """Test a missing file reads as None."""
        assert LocalFileStorage(tmp_path).get("state") is None

    def test_set_creates_directory(self, tmp_path):
        """Test the data directory is created on first write."""
        directory = tmp_path / "nested" / "data"
        storage = LocalFileStorage(directory)
        storage.set("state", '{"students": []}')
        assert directory.is_dir()
        assert storage.get("state") == '{"students": []}'

    def test_value_survives_new_instance(self, tmp_path):
        """Test values persist across provider instances."""
        LocalFileStorage(tmp_path).set("state", "saved")
        assert LocalFileStorage(tmp_path).get("state") == "saved"

    def test_unicode_round_trip(self, tmp_path):
        """Test text is stored as UTF-8."""
        storage = LocalFileStorage(tmp_path)
        storage.set("state", "Zoë – Français")
        assert storage.get("state") == "Zoë – Français"

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        """Test replacing a value leaves only the target file."""
        storage = LocalFileStorage(tmp_path)
        storage.set("state", "one")
        storage.set("state", "two")
        assert storage.get("state") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_key_is_sanitised(self, tmp_path):
        """Test unsafe key characters cannot escape the directory."""
        storage = LocalFileStorage(tmp_path)
        path = storage.path_for("../homeschool tracker/data")
        assert path.parent == tmp_path
        assert path.name == ".._homeschool_tracker_data.json"

    @pytest.mark.parametrize("key", ["", ".", ".."])
    def test_invalid_keys(self, tmp_path, key):
        """Test keys that cannot name a file are rejected."""
        with pytest.raises(InvalidKeyError):
            LocalFileStorage(tmp_path).path_for(key)

    def test_delete(self, tmp_path):
        """Test delete removes the file and reports whether it existed."""
        storage = LocalFileStorage(tmp_path)
        storage.set("state", "x")
        assert storage.delete("state") is True
        assert storage.delete("state") is False
        assert storage.get("state") is None

    def test_read_error(self, tmp_path):
        """Test an unreadable entry raises StorageReadError."""
        storage = LocalFileStorage(tmp_path)
        storage.path_for("state").mkdir()
        with pytest.raises(StorageReadError):
            storage.get("state")

    def test_write_error(self, tmp_path):
        """Test a failed write raises StorageWriteError and cleans up."""
        storage = LocalFileStorage(tmp_path)
        storage.path_for("state").mkdir()
        with pytest.raises(StorageWriteError):
            storage.set("state", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]
