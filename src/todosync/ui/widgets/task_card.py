"""Task card widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a priority column."""

    DEFAULT_CSS = """
    TaskCard {
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        border: round $primary-darken-2;
    }

    TaskCard:focus {
        border: round $accent;
    }

    TaskCard .task-sync {
        color: $text-muted;
    }
    """

    # Sync indicator display: (symbol, color, label)
    LOCAL_ONLY_DISPLAY = ("○", "yellow", "local")
    PENDING_DISPLAY = ("◌", "blue", "saving")

    class Focused(Message):
        """Posted when a card gains focus."""

        def __init__(self, task_data: Task) -> None:
            super().__init__()
            self.task_data = task_data

    def __init__(self, task_data: Task, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        yield Static(self._task_data.text, classes="task-text")
        sync_text = self._format_sync_indicator()
        if sync_text:
            yield Static(sync_text, classes="task-sync")

    def on_focus(self) -> None:
        self.post_message(self.Focused(self._task_data))

    def _format_sync_indicator(self) -> str:
        """Format sync state. Empty for tasks the server knows about."""
        if self._task_data.is_local:
            symbol, color, label = self.LOCAL_ONLY_DISPLAY
        elif self._task_data.id is None:
            symbol, color, label = self.PENDING_DISPLAY
        else:
            return ""
        return f"[{color}]{symbol}[/] {label}"
