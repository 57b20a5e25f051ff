"""Protocols for the collaborators of the sync controller."""

from typing import Protocol

from ..models import Priority, Task


class TasksApiProtocol(Protocol):
    """Interface of the remote tasks API.

    Every method raises ``TasksApiError`` when the remote cannot be reached
    or answers with a non-success status.
    """

    async def list_tasks(self) -> list[Task]:
        """Fetch the authoritative, ordered task collection."""
        ...

    async def create_task(self, text: str, priority: Priority) -> Task:
        """Create a task.

        Returns:
            The created task carrying its server-assigned id.
        """
        ...

    async def update_text(self, task_id: str | int, text: str) -> None:
        """Replace the text of a task."""
        ...

    async def update_priority(self, task_id: str | int, priority: Priority) -> None:
        """Replace the priority of a task."""
        ...

    async def delete_task(self, task_id: str | int) -> None:
        """Delete a task."""
        ...


class TaskStoreProtocol(Protocol):
    """Interface of the local persistent snapshot."""

    def load(self) -> list[Task] | None:
        """Return the stored collection, or None if nothing is stored."""
        ...

    def save(self, tasks: list[Task]) -> None:
        """Overwrite the stored collection."""
        ...
