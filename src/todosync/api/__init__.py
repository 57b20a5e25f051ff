"""Remote tasks API client."""

from .client import (
    TasksApiClient,
    TasksApiConnectionError,
    TasksApiError,
    TasksApiResponseError,
    TasksApiStatusError,
)

__all__ = [
    "TasksApiClient",
    "TasksApiConnectionError",
    "TasksApiError",
    "TasksApiResponseError",
    "TasksApiStatusError",
]
