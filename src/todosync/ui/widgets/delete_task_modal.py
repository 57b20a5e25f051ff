"""Delete confirmation modal."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ...models import Task


class DeleteTaskModal(ModalScreen[bool]):
    """Shows the task about to be deleted. Dismisses with True to delete."""

    DEFAULT_CSS = """
    DeleteTaskModal {
        align: center middle;
    }

    DeleteTaskModal > Vertical {
        width: 56;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $error;
    }

    DeleteTaskModal #delete-title {
        width: 100%;
        text-style: bold;
    }

    DeleteTaskModal #delete-text {
        width: 100%;
        margin: 1 0;
        color: $text-muted;
    }

    DeleteTaskModal Horizontal {
        width: 100%;
        height: auto;
        align: center middle;
    }

    DeleteTaskModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "delete", "Delete"),
        Binding("n", "keep", "Keep"),
        Binding("escape", "keep", "Cancel"),
    ]

    def __init__(self, task_data: Task) -> None:
        super().__init__()
        self._task_data = task_data

    @property
    def message(self) -> str:
        return f"Delete this {self._task_data.priority.value} priority task?"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.message, id="delete-title")
            yield Static(self._task_data.text, id="delete-text")
            with Horizontal():
                yield Button("Delete", id="delete", variant="error")
                yield Button("Keep", id="keep", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_delete(self) -> None:
        self.dismiss(True)

    def action_keep(self) -> None:
        self.dismiss(False)
