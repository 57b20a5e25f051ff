"""Async client for the remote tasks REST API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..models import Priority, Task

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[Task])


class TasksApiError(Exception):
    """Base exception for remote API failures.

    Every subclass means the same thing to callers: the remote is unreachable
    for this request.
    """

    pass


class TasksApiConnectionError(TasksApiError):
    """The request never produced an HTTP response."""

    pass


class TasksApiStatusError(TasksApiError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class TasksApiResponseError(TasksApiError):
    """The response body could not be decoded into tasks."""

    pass


class TasksApiClient:
    """Thin async wrapper around the tasks CRUD endpoints.

    Endpoints (relative to ``base_url``):
    - GET /tasks
    - POST /tasks
    - PATCH /tasks/{id}
    - DELETE /tasks/{id}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base address, e.g. "http://localhost:5000/api"
            timeout: Transport timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> TasksApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Send a request and raise TasksApiError on any failure."""
        logger.debug("%s %s: body=%s", method, path, json)

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise TasksApiConnectionError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if not response.is_success:
            logger.error(
                "%s %s: HTTP %d (%.0fms)", method, path, response.status_code, elapsed_ms
            )
            raise TasksApiStatusError(
                response.status_code, f"HTTP error: {response.status_code}"
            )

        logger.info("%s %s: %d (%.0fms)", method, path, response.status_code, elapsed_ms)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TasksApiResponseError(f"Invalid JSON response: {e}") from e

    async def list_tasks(self) -> list[Task]:
        """Fetch the full ordered task collection."""
        response = await self._request("GET", "/tasks")
        try:
            return _TASK_LIST.validate_python(self._decode(response))
        except ValidationError as e:
            raise TasksApiResponseError(f"Unexpected task list payload: {e}") from e

    async def create_task(self, text: str, priority: Priority) -> Task:
        """Create a task and return it with its server-assigned id."""
        response = await self._request(
            "POST", "/tasks", json={"text": text, "priority": priority.value}
        )
        try:
            return Task.model_validate(self._decode(response))
        except ValidationError as e:
            raise TasksApiResponseError(f"Unexpected task payload: {e}") from e

    async def update_text(self, task_id: str | int, text: str) -> None:
        """Replace a task's text. The response body is ignored."""
        await self._request("PATCH", f"/tasks/{task_id}", json={"text": text})

    async def update_priority(self, task_id: str | int, priority: Priority) -> None:
        """Replace a task's priority. The response body is ignored."""
        await self._request("PATCH", f"/tasks/{task_id}", json={"priority": priority.value})

    async def delete_task(self, task_id: str | int) -> None:
        """Delete a task by id."""
        await self._request("DELETE", f"/tasks/{task_id}")

    async def is_reachable(self) -> bool:
        """Probe the API host.

        Any HTTP response, whatever its status, means the host can be reached.
        """
        try:
            await self._client.head("/")
        except httpx.RequestError as e:
            logger.debug("Reachability probe failed: %s", e)
            return False
        return True
