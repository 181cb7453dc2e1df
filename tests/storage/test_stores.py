"""
Unit Tests for Persistence Stores
"""

import pytest

from exam_engine.storage import FileStore, MemoryStore
from exam_engine.storage.file_store import locked_file


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return FileStore(tmp_path / "saves")


class TestPersistenceStore:
    """Behaviour shared by every store."""

    def test_get_when_missing_then_none(self, store):
        """A missing key reads as None."""
        assert store.get("attempt_x") is None

    def test_set_then_get_when_written_then_same_string(self, store):
        """Stored strings come back unchanged."""
        store.set("attempt_x", '{"a": 1}')

        assert store.get("attempt_x") == '{"a": 1}'

    def test_set_when_key_exists_then_replaced(self, store):
        """A second write replaces the first."""
        store.set("attempt_x", "old")
        store.set("attempt_x", "new")

        assert store.get("attempt_x") == "new"

    def test_delete_when_present_then_absent(self, store):
        """Deleted keys read as None."""
        store.set("attempt_x", "v")

        store.delete("attempt_x")

        assert store.get("attempt_x") is None

    def test_delete_when_missing_then_no_error(self, store):
        """Deleting a missing key is not an error."""
        store.delete("attempt_never_written")

    def test_keys_are_independent(self, store):
        """Deleting one key leaves others alone."""
        store.set("attempt_a", "1")
        store.set("attempt_b", "2")
        store.delete("attempt_a")

        assert store.get("attempt_b") == "2"


class TestFileStore:
    """Tests specific to FileStore."""

    def test_path_for_when_unsafe_key_then_sanitized_file_in_directory(self, tmp_path):
        """Keys cannot escape the store directory."""
        store = FileStore(tmp_path)

        path = store.path_for("attempt_../../etc/passwd")

        assert path.parent == tmp_path
        assert "/" not in path.name
        assert path.suffix == ".json"

    def test_path_for_when_keys_sanitize_alike_then_distinct_files(self, tmp_path):
        """Keys that sanitize alike still map to different files."""
        store = FileStore(tmp_path)

        assert store.path_for("attempt_a/b") != store.path_for("attempt_a:b")

    def test_set_when_written_then_no_temp_file_left(self, tmp_path):
        """Atomic replace leaves no temp file behind."""
        store = FileStore(tmp_path)

        store.set("attempt_x", "value")

        assert list(tmp_path.glob("*.tmp")) == []
        assert store.path_for("attempt_x").read_text(encoding="utf-8") == "value"

    def test_set_when_directory_missing_then_created(self, tmp_path):
        """The store directory is created on first write."""
        store = FileStore(tmp_path / "nested" / "saves")

        store.set("attempt_x", "value")

        assert store.get("attempt_x") == "value"

    def test_data_when_new_instance_then_survives(self, tmp_path):
        """Blobs survive a new store instance."""
        FileStore(tmp_path).set("attempt_x", "kept")

        assert FileStore(tmp_path).get("attempt_x") == "kept"


class TestMemoryStore:

    def test_writes_when_set_then_counted(self):
        """MemoryStore counts every write."""
        store = MemoryStore()

        store.set("k", "1")
        store.set("k", "2")

        assert store.writes == 2
        assert "k" in store
        assert len(store) == 1


class TestLockedFile:

    def test_locked_file_when_read_mode_and_missing_then_created(self, tmp_path):
        """Read mode creates a missing file before locking."""
        path = tmp_path / "sub" / "file.txt"

        with locked_file(path, "r") as f:
            assert f.read() == ""

        assert path.exists()
