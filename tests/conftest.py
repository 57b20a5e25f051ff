"""Shared fixtures: an in-memory fake of the remote API and a real local cache."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from todosync.api import TasksApiConnectionError
from todosync.models import Priority, Task
from todosync.repositories import LocalStorage, TaskCache
from todosync.services import ConnectivityMonitor, SyncController


class FakeTasksApi:
    """
    Deterministic stand-in for TasksApiClient.

    - Records every call for assertions
    - ``fail = True`` makes every call raise a transport error
    - ``gate`` (an asyncio.Event) holds calls until it is set
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.server_tasks: list[Task] = list(tasks or [])
        self.calls: list[tuple] = []
        self.fail = False
        self.gate: asyncio.Event | None = None
        self._next_id = 1

    async def _call(self, *call: object) -> None:
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise TasksApiConnectionError("Request failed: connection refused")

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    async def list_tasks(self) -> list[Task]:
        await self._call("list_tasks")
        return [task.model_copy() for task in self.server_tasks]

    async def create_task(self, text: str, priority: Priority) -> Task:
        await self._call("create_task", text, priority)
        task = Task(id=f"srv{self._next_id}", text=text, priority=priority)
        self._next_id += 1
        self.server_tasks.insert(0, task)
        return task.model_copy()

    async def update_text(self, task_id: str | int, text: str) -> None:
        await self._call("update_text", task_id, text)

    async def update_priority(self, task_id: str | int, priority: Priority) -> None:
        await self._call("update_priority", task_id, priority)

    async def delete_task(self, task_id: str | int) -> None:
        await self._call("delete_task", task_id)


class FakeProbe:
    """Reachability probe whose answer the test controls."""

    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.calls = 0

    async def __call__(self) -> bool:
        self.calls += 1
        return self.reachable


@pytest.fixture
def api() -> FakeTasksApi:
    """Fake remote API with an empty server-side collection."""
    return FakeTasksApi()


@pytest.fixture
def cache(tmp_path: Path) -> TaskCache:
    """Real local cache in a temporary directory."""
    return TaskCache(LocalStorage(tmp_path / "data"))


@pytest.fixture
def reload_cache(tmp_path: Path):
    """Read the persisted snapshot back through a fresh cache instance."""

    def _reload() -> list[Task] | None:
        return TaskCache(LocalStorage(tmp_path / "data")).load()

    return _reload


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def monitor(probe: FakeProbe) -> ConnectivityMonitor:
    return ConnectivityMonitor(probe, interval=0.01)


@pytest.fixture
def controller(api: FakeTasksApi, cache: TaskCache, monitor: ConnectivityMonitor) -> SyncController:
    return SyncController(api, cache, monitor)
