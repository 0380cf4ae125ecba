"""Tests for the key-value storage backends."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from unimaz.config import Settings
from unimaz.db.storage import (
    CorruptStorageError,
    JsonFileStorage,
    MemoryStorage,
    StorageError,
    create_storage,
)


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_set_get_remove(self):
        storage = MemoryStorage()

        storage.set_item("key", "value")
        assert storage.get_item("key") == "value"

        storage.remove_item("key")
        assert storage.get_item("key") is None

    def test_initial_items_are_copied(self):
        initial = {"key": "value"}
        storage = MemoryStorage(initial)

        storage.set_item("key", "other")

        assert initial["key"] == "value"

    def test_remove_missing_key(self):
        MemoryStorage().remove_item("missing")

    def test_clear(self):
        storage = MemoryStorage({"a": "1", "b": "2"})

        storage.clear()

        assert storage.get_item("a") is None


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data.json")

        assert storage.get_item("key") is None

    def test_set_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        storage = JsonFileStorage(path)

        storage.set_item("key", "value")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"key": "value"}

    def test_unicode_is_stored_readably(self, tmp_path):
        path = tmp_path / "data.json"
        storage = JsonFileStorage(path)

        storage.set_item("subject", "Dövrələr nəzəriyyəsi")

        assert "Dövrələr nəzəriyyəsi" in path.read_text(encoding="utf-8")
        assert JsonFileStorage(path).get_item("subject") == "Dövrələr nəzəriyyəsi"

    def test_items_survive_new_instance(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileStorage(path).set_item("a", "1")
        JsonFileStorage(path).set_item("b", "2")

        storage = JsonFileStorage(path)

        assert storage.get_item("a") == "1"
        assert storage.get_item("b") == "2"

    def test_remove(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data.json")
        storage.set_item("a", "1")

        storage.remove_item("a")
        storage.remove_item("a")

        assert storage.get_item("a") is None

    def test_no_temporary_files_left_behind(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data.json")

        storage.set_item("a", "1")
        storage.set_item("a", "2")

        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    @pytest.mark.parametrize("content", ["{oops", "[1, 2]", "\xff"])
    def test_corrupt_file_raises_storage_error(self, tmp_path, content):
        path = tmp_path / "data.json"
        path.write_text(content, encoding="latin-1")

        with pytest.raises(CorruptStorageError):
            JsonFileStorage(path).get_item("key")

    def test_write_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{oops", encoding="utf-8")
        storage = JsonFileStorage(path)

        storage.set_item("key", "value")

        assert storage.get_item("key") == "value"

    def test_unreadable_file_is_not_overwritten(self, tmp_path):
        """Test that a read error other than corruption aborts the write."""
        path = tmp_path / "data.json"
        storage = JsonFileStorage(path)
        storage.set_item("a", "1")

        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError) as exc_info:
                storage.set_item("b", "2")

        assert not isinstance(exc_info.value, CorruptStorageError)
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}

    def test_blank_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("  \n", encoding="utf-8")

        assert JsonFileStorage(path).get_item("key") is None

    def test_non_string_values_are_ignored(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1, "b": "x"}', encoding="utf-8")
        storage = JsonFileStorage(path)

        assert storage.get_item("a") is None
        assert storage.get_item("b") == "x"


class TestCreateStorage:
    """Tests for create_storage()."""

    def test_memory_backend(self):
        storage = create_storage(Settings(storage_backend="memory"))

        assert isinstance(storage, MemoryStorage)

    def test_file_backend(self, tmp_path):
        path = tmp_path / "userdata.json"

        storage = create_storage(Settings(storage_backend="file", storage_path=str(path)))

        assert isinstance(storage, JsonFileStorage)
        assert storage.path == path
