"""Data models."""

from .enums import Connectivity, Priority
from .task import LOCAL_ID_PREFIX, Task, generate_local_id, is_local_id

__all__ = [
    "LOCAL_ID_PREFIX",
    "Connectivity",
    "Priority",
    "Task",
    "generate_local_id",
    "is_local_id",
]
