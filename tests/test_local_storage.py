"""Tests for LocalStorage and TaskCache."""

import json
from pathlib import Path

import pytest

from todosync.models import Priority, Task
from todosync.repositories import LocalStorage, LocalStorageError, TaskCache


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """Create storage in a directory that does not exist yet."""
    return LocalStorage(tmp_path / "data")


class TestLocalStorage:
    """Tests for the key/value file."""

    def test_missing_file_returns_none(self, storage: LocalStorage):
        assert storage.get_item("tasks") is None

    def test_set_creates_directory_and_file(self, storage: LocalStorage):
        storage.set_item("tasks", "[]")

        assert storage.path.exists()
        assert json.loads(storage.path.read_text()) == {"tasks": "[]"}

    def test_set_overwrites_and_keeps_other_keys(self, storage: LocalStorage):
        storage.set_item("tasks", "[1]")
        storage.set_item("theme", "dark")
        storage.set_item("tasks", "[2]")

        assert storage.get_item("tasks") == "[2]"
        assert storage.get_item("theme") == "dark"

    def test_remove_item(self, storage: LocalStorage):
        storage.set_item("tasks", "[]")
        storage.remove_item("tasks")
        storage.remove_item("never-set")

        assert storage.get_item("tasks") is None

    def test_no_temp_files_left_behind(self, storage: LocalStorage):
        storage.set_item("tasks", "[]")
        storage.set_item("tasks", "[1]")

        assert [p.name for p in storage.data_dir.iterdir()] == [LocalStorage.FILENAME]

    def test_unreadable_file_raises(self, storage: LocalStorage):
        storage.data_dir.mkdir(parents=True)
        storage.path.write_text("{not json")

        with pytest.raises(LocalStorageError):
            storage.get_item("tasks")

    def test_non_object_file_raises(self, storage: LocalStorage):
        storage.data_dir.mkdir(parents=True)
        storage.path.write_text("[1, 2]")

        with pytest.raises(LocalStorageError):
            storage.get_item("tasks")

    def test_set_replaces_unreadable_file(self, storage: LocalStorage):
        storage.data_dir.mkdir(parents=True)
        storage.path.write_text("{not json")

        storage.set_item("tasks", "[]")

        assert storage.get_item("tasks") == "[]"


class TestTaskCache:
    """Tests for the task snapshot."""

    def test_load_without_snapshot(self, storage: LocalStorage):
        assert TaskCache(storage).load() is None

    def test_save_then_load(self, storage: LocalStorage):
        cache = TaskCache(storage)
        tasks = [
            Task(id="local_abc", text="Offline", priority=Priority.LOW),
            Task(id="srv1", text="Synced", priority=Priority.HIGH),
            Task(text="Pending", priority=Priority.MEDIUM),
        ]

        cache.save(tasks)

        assert TaskCache(storage).load() == tasks

    def test_snapshot_stored_under_fixed_key(self, storage: LocalStorage):
        TaskCache(storage).save([Task(id="srv1", text="Buy milk", priority=Priority.LOW)])

        raw = storage.get_item(TaskCache.STORAGE_KEY)
        assert json.loads(raw) == [{"_id": "srv1", "text": "Buy milk", "priority": "Low"}]

    def test_empty_collection_is_stored(self, storage: LocalStorage):
        cache = TaskCache(storage)
        cache.save([])
        assert cache.load() == []

    def test_corrupt_snapshot_treated_as_absent(self, storage: LocalStorage):
        storage.set_item(TaskCache.STORAGE_KEY, "[{")
        assert TaskCache(storage).load() is None

    def test_invalid_task_treated_as_absent(self, storage: LocalStorage):
        storage.set_item(
            TaskCache.STORAGE_KEY, json.dumps([{"_id": "x", "text": "t", "priority": "Urgent"}])
        )
        assert TaskCache(storage).load() is None

    def test_unreadable_storage_treated_as_absent(self, storage: LocalStorage):
        storage.data_dir.mkdir(parents=True)
        storage.path.write_text("garbage")
        assert TaskCache(storage).load() is None
