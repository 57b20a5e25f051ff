"""Priority column widget."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import Priority, Task
from .task_card import TaskCard


class EmptyColumnMessage(Static):
    """Displayed when a column has no tasks."""

    pass


class PriorityColumn(Widget):
    """One priority bucket of the dashboard."""

    DEFAULT_CSS = """
    PriorityColumn {
        width: 1fr;
        height: 100%;
        border: solid $primary;
    }

    PriorityColumn .column-header {
        width: 100%;
        text-align: center;
        text-style: bold;
        background: $primary-darken-2;
    }

    PriorityColumn EmptyColumnMessage {
        color: $text-muted;
        text-align: center;
        width: 100%;
    }
    """

    def __init__(self, priority: Priority, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.priority = priority
        self._tasks: list[Task] = []

    @property
    def _css_suffix(self) -> str:
        return self.priority.value.lower()

    def compose(self) -> ComposeResult:
        yield Static(self._header_text, classes="column-header", id=f"header-{self._css_suffix}")
        yield VerticalScroll(classes="column-content", id=f"content-{self._css_suffix}")

    @property
    def _header_text(self) -> str:
        """Header text with styled task count."""
        return f"{self.priority.value} Priority [dim]({len(self._tasks)})[/]"

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def set_tasks(self, tasks: list[Task]) -> None:
        """Set the tasks for this column."""
        self._tasks = tasks
        # Use call_after_refresh to ensure DOM is ready
        self.call_after_refresh(self._refresh_tasks)

    async def _refresh_tasks(self) -> None:
        """Rebuild the task cards in this column."""
        header = self.query_one(f"#header-{self._css_suffix}", Static)
        header.update(self._header_text)

        content = self.query_one(f"#content-{self._css_suffix}", VerticalScroll)
        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyColumnMessage(f"No {self._css_suffix} priority tasks"))
            return
        await content.mount_all(TaskCard(task) for task in self._tasks)
