"""Repository layer for data access."""

from .local_storage import LocalStorage, LocalStorageError
from .protocol import TasksApiProtocol, TaskStoreProtocol
from .task_cache import TaskCache

__all__ = [
    "LocalStorage",
    "LocalStorageError",
    "TaskCache",
    "TaskStoreProtocol",
    "TasksApiProtocol",
]
