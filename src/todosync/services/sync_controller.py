"""Owner of the task collection and its sync with the remote API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from ..api import TasksApiError
from ..models import Connectivity, Priority, Task, generate_local_id

if TYPE_CHECKING:
    from ..repositories import TasksApiProtocol, TaskStoreProtocol
    from .connectivity import ConnectivityMonitor

logger = logging.getLogger(__name__)

INVALID_PRIORITY_MESSAGE = "Invalid priority! Please enter High, Medium, or Low."


class TaskValidationError(ValueError):
    """User input was rejected. Nothing was changed."""

    pass


class NoTaskSelectedError(Exception):
    """An edit, priority change or delete was requested with no selection."""

    pass


def parse_priority(value: str | Priority) -> Priority:
    """Parse a priority, accepting only the three known buckets.

    Raises:
        TaskValidationError: If value is not High, Medium or Low.
    """
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value.strip())
    except (ValueError, AttributeError) as e:
        raise TaskValidationError(INVALID_PRIORITY_MESSAGE) from e


class SyncController:
    """Local-first owner of the task list.

    Every mutation is applied to the in-memory list and written to the local
    store straight away. If the remote API is believed reachable and the task
    is known to the server, the matching remote call is then scheduled on the
    running event loop. A failed remote call flips connectivity to offline and
    leaves the local change in place; nothing is rolled back or retried. The
    only recovery is a full refetch when connectivity comes back, which
    replaces the local list wholesale.

    Mutations must be called from within the running event loop.
    """

    def __init__(
        self,
        api: TasksApiProtocol,
        store: TaskStoreProtocol,
        monitor: ConnectivityMonitor | None = None,
    ) -> None:
        self.api = api
        self.store = store
        self._monitor = monitor
        self._tasks: list[Task] = []
        self._listeners: list[Callable[[], None]] = []
        self._inflight: set[asyncio.Task[Any]] = set()

        self.connectivity = Connectivity.ONLINE
        self.is_loading = False
        self.selected_task: Task | None = None

        # Input staging for the "add task" form
        self.pending_text = ""
        self.pending_priority = Priority.HIGH

    # --- State ---

    @property
    def tasks(self) -> list[Task]:
        """Tasks newest first. The list is a copy; the tasks are not."""
        return list(self._tasks)

    @property
    def is_online(self) -> bool:
        return self.connectivity is Connectivity.ONLINE

    def tasks_by_priority(self, priority: Priority) -> list[Task]:
        """Tasks in one priority bucket, in collection order."""
        return [task for task in self._tasks if task.priority == priority]

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Call listener after every change to tasks, connectivity or loading."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _commit(self) -> None:
        """Persist the full collection and tell listeners."""
        self.store.save(self._tasks)
        self._notify()

    def _replace_tasks(self, tasks: list[Task]) -> None:
        self._tasks = list(tasks)
        self._commit()

    def _index_of(self, task: Task) -> int | None:
        # Identity, not equality: an optimistic entry has no id to compare
        for index, candidate in enumerate(self._tasks):
            if candidate is task:
                return index
        return None

    def _set_connectivity(self, state: Connectivity) -> None:
        if self._monitor is not None:
            self._monitor.record(state)
        if state is self.connectivity:
            return
        logger.info("Now %s", state.value)
        self.connectivity = state
        self._notify()

    # --- Lifecycle ---

    async def start(self) -> None:
        """Load the local snapshot, subscribe to connectivity, then fetch."""
        cached = self.store.load()
        if cached is not None:
            logger.info("Loaded %d tasks from local storage", len(cached))
            self._replace_tasks(cached)

        if self._monitor is not None:
            self._monitor.subscribe(self._on_connectivity_change)

        await self.refresh(show_loading=True)

    def close(self) -> None:
        """Stop listening for connectivity changes."""
        if self._monitor is not None:
            self._monitor.unsubscribe(self._on_connectivity_change)

    async def drain(self) -> None:
        """Wait for every remote call still in flight."""
        while self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def refresh(self, show_loading: bool = False) -> bool:
        """Replace the collection with the server's, all or nothing.

        Args:
            show_loading: Raise ``is_loading`` while waiting. Only the initial
                fetch does this, so later refetches never hide the list.

        Returns:
            True if the server answered, False if the local list was kept.
        """
        if show_loading:
            self.is_loading = True
            self._notify()
        try:
            tasks = await self.api.list_tasks()
        except TasksApiError as e:
            logger.warning("Could not fetch tasks, using local copy: %s", e)
            self.is_loading = False
            self._set_connectivity(Connectivity.OFFLINE)
            self._notify()
            return False

        logger.info("Fetched %d tasks from server", len(tasks))
        self.is_loading = False
        self.selected_task = None
        self._set_connectivity(Connectivity.ONLINE)
        self._replace_tasks(tasks)
        return True

    def _on_connectivity_change(self, state: Connectivity) -> None:
        if state is Connectivity.ONLINE:
            self._set_connectivity(Connectivity.ONLINE)
            self._spawn(self.refresh())
        else:
            self._set_connectivity(Connectivity.OFFLINE)

    # --- Remote calls ---

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._on_remote_done)

    def _on_remote_done(self, task: asyncio.Task[Any]) -> None:
        self._inflight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Remote call crashed", exc_info=task.exception())

    def _should_sync(self, task: Task) -> bool:
        if not self.is_online:
            return False
        if not task.is_synced:
            logger.debug("Task %s is not on the server, skipping remote call", task.id)
            return False
        return True

    async def _remote(self, action: str, call: Coroutine[Any, Any, None]) -> None:
        try:
            await call
        except TasksApiError as e:
            logger.warning("Remote %s failed, change kept locally: %s", action, e)
            self._set_connectivity(Connectivity.OFFLINE)

    async def _remote_create(self, task: Task, text: str, priority: Priority) -> None:
        try:
            saved = await self.api.create_task(text, priority)
        except TasksApiError as e:
            logger.warning("Remote create failed, task kept locally: %s", e)
            self._set_connectivity(Connectivity.OFFLINE)
            # Never acknowledged, so from now on it is a local-only task
            if task.id is None and self._index_of(task) is not None:
                task.id = generate_local_id()
                self._commit()
            return

        index = self._index_of(task)
        if index is None:
            logger.info("Created task %s is no longer in the local list", saved.id)
            return

        # Local edits made while the POST was in flight win over the echo
        text_changed = task.text != text
        priority_changed = task.priority != priority
        if text_changed:
            saved.text = task.text
        if priority_changed:
            saved.priority = task.priority

        self._tasks[index] = saved
        if self.selected_task is task:
            self.selected_task = saved
        self._commit()
        logger.debug("Optimistic task replaced by server task %s", saved.id)

        if text_changed and self._should_sync(saved):
            self._spawn(self._remote("edit", self.api.update_text(saved.id, saved.text)))
        if priority_changed and self._should_sync(saved):
            self._spawn(
                self._remote("priority change", self.api.update_priority(saved.id, saved.priority))
            )

    # --- Input staging ---

    def submit(self) -> Task | None:
        """Create a task from the staged input, then reset the staging."""
        task = self.create_task(self.pending_text, self.pending_priority)
        if task is not None:
            self.pending_text = ""
            self.pending_priority = Priority.HIGH
        return task

    # --- Selection ---

    def select_task(self, task: Task | None) -> None:
        """Select task for the next edit, priority change or delete."""
        if task is not None and self._index_of(task) is None:
            raise ValueError("Only tasks in the collection can be selected")
        self.selected_task = task

    def clear_selection(self) -> None:
        self.selected_task = None

    def _require_selection(self) -> Task:
        task = self.selected_task
        if task is None:
            raise NoTaskSelectedError("No task selected")
        if self._index_of(task) is None:
            # Replaced by a refetch while a prompt was open
            self.selected_task = None
            raise NoTaskSelectedError("Selected task is no longer in the list")
        return task

    # --- Mutations ---

    def create_task(self, text: str, priority: str | Priority = Priority.HIGH) -> Task | None:
        """Add a task at the head of the list.

        Offline, the task gets a local id and never reaches the server. Online,
        it starts without an id and is swapped for the server's copy once the
        POST answers.

        Returns:
            The new task, or None if text was blank.

        Raises:
            TaskValidationError: If priority is not a known bucket.
        """
        text = text.strip()
        if not text:
            logger.debug("Ignoring blank task")
            return None
        priority = parse_priority(priority)

        online = self.is_online
        task = Task(id=None if online else generate_local_id(), text=text, priority=priority)
        self._replace_tasks([task, *self._tasks])
        logger.info("Task created: %s (priority=%s)", task.id or "<pending>", priority.value)

        if online:
            self._spawn(self._remote_create(task, text, priority))
        return task

    def edit_task(self, new_text: str | None) -> Task | None:
        """Replace the selected task's text.

        None means the edit was cancelled: nothing changes and the selection
        is kept.

        Raises:
            NoTaskSelectedError: If no task is selected.
            TaskValidationError: If new_text is blank.
        """
        task = self._require_selection()
        if new_text is None:
            return None
        text = new_text.strip()
        if not text:
            raise TaskValidationError("Task text cannot be empty")

        task.text = text
        self.selected_task = None
        self._commit()
        logger.info("Task edited: %s", task.id)

        if self._should_sync(task):
            self._spawn(self._remote("edit", self.api.update_text(task.id, text)))
        return task

    def change_priority(self, new_priority: str | Priority | None) -> Task | None:
        """Move the selected task to another priority bucket.

        Raises:
            NoTaskSelectedError: If no task is selected.
            TaskValidationError: If new_priority is not High, Medium or Low.
        """
        task = self._require_selection()
        if new_priority is None:
            return None
        priority = parse_priority(new_priority)

        task.priority = priority
        self.selected_task = None
        self._commit()
        logger.info("Task %s moved to %s", task.id, priority.value)

        if self._should_sync(task):
            self._spawn(self._remote("priority change", self.api.update_priority(task.id, priority)))
        return task

    def delete_task(self) -> Task:
        """Remove the selected task, whatever the remote outcome.

        Raises:
            NoTaskSelectedError: If no task is selected.
        """
        task = self._require_selection()
        self._tasks = [candidate for candidate in self._tasks if candidate is not task]
        self.selected_task = None
        self._commit()
        logger.info("Task deleted: %s", task.id)

        if self._should_sync(task):
            self._spawn(self._remote("delete", self.api.delete_task(task.id)))
        return task
