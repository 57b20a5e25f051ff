"""Service layer for business logic."""

from .connectivity import ConnectivityMonitor
from .sync_controller import (
    NoTaskSelectedError,
    SyncController,
    TaskValidationError,
    parse_priority,
)

__all__ = [
    "ConnectivityMonitor",
    "NoTaskSelectedError",
    "SyncController",
    "TaskValidationError",
    "parse_priority",
]
