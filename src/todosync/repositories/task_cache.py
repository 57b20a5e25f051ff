"""Persistent snapshot of the task collection."""

from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter, ValidationError

from ..models import Task
from .local_storage import LocalStorage, LocalStorageError

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[Task])


class TaskCache:
    """The full task collection stored as JSON under a fixed storage key."""

    STORAGE_KEY = "tasks"

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage

    def load(self) -> list[Task] | None:
        """Load the stored collection.

        Returns:
            The stored tasks, or None if nothing usable is stored.
        """
        try:
            raw = self.storage.get_item(self.STORAGE_KEY)
        except LocalStorageError as e:
            logger.warning("Ignoring local task snapshot: %s", e)
            return None
        if raw is None:
            return None
        try:
            tasks = _TASK_LIST.validate_python(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("Ignoring corrupt local task snapshot: %s", e)
            return None
        logger.debug("Loaded %d tasks from local storage", len(tasks))
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Overwrite the stored collection with tasks."""
        payload = json.dumps([task.to_json() for task in tasks])
        self.storage.set_item(self.STORAGE_KEY, payload)
        logger.debug("Saved %d tasks to local storage", len(tasks))
