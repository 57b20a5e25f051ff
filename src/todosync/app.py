"""todosync TUI Application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App
from textual.binding import Binding

from .api import TasksApiClient
from .config import Settings
from .repositories import LocalStorage, TaskCache
from .services import (
    ConnectivityMonitor,
    NoTaskSelectedError,
    SyncController,
    TaskValidationError,
)
from .ui.screens.dashboard import DashboardScreen
from .ui.widgets import DeleteTaskModal, TextPromptModal

if TYPE_CHECKING:
    from .models import Task


class TodosyncApp(App):
    """todosync - prioritized to-do list with offline support."""

    TITLE = "todosync"

    CSS = """
    #columns {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("p", "change_priority", "Priority", show=True),
        Binding("d", "delete_task", "Delete", show=True),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize API client, local cache, monitor and controller."""
        self.api = TasksApiClient(self.settings.api_url, timeout=self.settings.request_timeout)
        self.cache = TaskCache(LocalStorage(self.settings.data_dir))
        self.monitor = ConnectivityMonitor(
            self.api.is_reachable, interval=self.settings.probe_interval
        )
        self.controller = SyncController(self.api, self.cache, self.monitor)
        self.controller.add_listener(self._on_controller_change)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(DashboardScreen())
        self.run_worker(self.controller.start(), name="initial-fetch", exclusive=False)
        self.run_worker(self.monitor.run(), name="connectivity-monitor", exclusive=False)

    async def on_unmount(self) -> None:
        """Tear down in reverse order of construction."""
        self.controller.close()
        await self.controller.drain()
        await self.api.aclose()

    def _on_controller_change(self) -> None:
        screen = self.screen_stack[-1] if self.screen_stack else None
        if isinstance(screen, DashboardScreen):
            screen.schedule_render()

    def action_refresh(self) -> None:
        """Refetch everything from the server."""
        self.run_worker(self.controller.refresh(), name="refresh", exclusive=False)

    def _selected_or_warn(self) -> Task | None:
        task = self.controller.selected_task
        if task is None:
            self.notify("Select a task first", severity="warning")
        return task

    # Task actions
    def action_edit_task(self) -> None:
        """Prompt for new text for the selected task."""
        task = self._selected_or_warn()
        if task is None:
            return
        self.push_screen(
            TextPromptModal("Edit task:", default=task.text),
            callback=self._handle_edit,
        )

    def _handle_edit(self, new_text: str | None) -> None:
        try:
            self.controller.edit_task(new_text)
        except (TaskValidationError, NoTaskSelectedError) as e:
            self.notify(str(e), severity="error")

    def action_change_priority(self) -> None:
        """Prompt for a new priority for the selected task."""
        task = self._selected_or_warn()
        if task is None:
            return
        self.push_screen(
            TextPromptModal("Enter new priority:", default=task.priority.value),
            callback=self._handle_priority,
        )

    def _handle_priority(self, new_priority: str | None) -> None:
        try:
            self.controller.change_priority(new_priority)
        except (TaskValidationError, NoTaskSelectedError) as e:
            self.notify(str(e), severity="error")

    def action_delete_task(self) -> None:
        """Ask for confirmation, then delete the selected task."""
        task = self._selected_or_warn()
        if task is None:
            return
        self.push_screen(
            DeleteTaskModal(task),
            callback=self._handle_delete_confirm,
        )

    def _handle_delete_confirm(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        try:
            self.controller.delete_task()
        except NoTaskSelectedError as e:
            self.notify(str(e), severity="error")
        else:
            self.notify("Task deleted", timeout=2)


def run(settings: Settings | None = None) -> None:
    """Run the todosync application."""
    app = TodosyncApp(settings)
    app.run()
