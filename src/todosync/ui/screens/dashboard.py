"""Main task dashboard screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Select, Static

from ...models import Priority
from ..widgets.priority_column import PriorityColumn
from ..widgets.task_card import TaskCard

if TYPE_CHECKING:
    from ...services import SyncController

OFFLINE_MESSAGE = (
    "You're currently offline. Changes will be saved locally and synced when back online."
)


class DashboardScreen(Screen):
    """Input row, offline banner and one column per priority."""

    DEFAULT_CSS = """
    DashboardScreen #offline-banner {
        background: $warning 30%;
        border-left: thick $warning;
        padding: 0 1;
        display: none;
    }

    DashboardScreen #offline-banner.-visible {
        display: block;
    }

    DashboardScreen #input-row {
        height: auto;
        padding: 0 1;
    }

    DashboardScreen #task-input {
        width: 1fr;
    }

    DashboardScreen #priority-select {
        width: 24;
    }

    DashboardScreen #loading {
        width: 100%;
        text-align: center;
        margin-top: 1;
        display: none;
    }

    DashboardScreen #loading.-visible {
        display: block;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._render_pending = False

    @property
    def controller(self) -> SyncController:
        return self.app.controller  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(OFFLINE_MESSAGE, id="offline-banner")
        with Horizontal(id="input-row"):
            yield Input(placeholder="Enter task", id="task-input")
            yield Select(
                [(f"{priority.value} Priority", priority) for priority in Priority],
                value=Priority.HIGH,
                allow_blank=False,
                id="priority-select",
            )
            yield Button("Add Task", id="add-task", variant="primary")
        yield Static("Loading tasks...", id="loading")
        with Horizontal(id="columns"):
            for priority in Priority:
                yield PriorityColumn(priority, id=f"column-{priority.value.lower()}")
        yield Footer()

    def on_mount(self) -> None:
        self.render_state()

    def schedule_render(self) -> None:
        """Render once after the current batch of controller changes."""
        if self._render_pending:
            return
        self._render_pending = True
        self.call_after_refresh(self.render_state)

    def render_state(self) -> None:
        """Redraw everything from the controller's state."""
        self._render_pending = False
        controller = self.controller

        self.query_one("#offline-banner", Static).set_class(
            not controller.is_online, "-visible"
        )
        self.query_one("#loading", Static).set_class(controller.is_loading, "-visible")
        self.query_one("#columns", Horizontal).display = not controller.is_loading

        for priority in Priority:
            column = self.query_one(f"#column-{priority.value.lower()}", PriorityColumn)
            column.set_tasks(controller.tasks_by_priority(priority))

    # --- Input staging ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "task-input":
            self.controller.pending_text = event.value

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "priority-select" and isinstance(event.value, Priority):
            self.controller.pending_priority = event.value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "task-input":
            self.submit_task()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-task":
            self.submit_task()

    def submit_task(self) -> None:
        """Create a task from the input row and reset it."""
        if self.controller.submit() is None:
            return
        self.query_one("#task-input", Input).value = ""
        self.query_one("#priority-select", Select).value = self.controller.pending_priority

    # --- Selection ---

    def on_task_card_focused(self, event: TaskCard.Focused) -> None:
        try:
            self.controller.select_task(event.task_data)
        except ValueError:
            # Card from before the last refetch; it is about to be replaced
            self.log.warning(f"Ignoring stale task card: {event.task_data.id}")
