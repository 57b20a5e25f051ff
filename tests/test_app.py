"""Tests for app action handlers.

These verify that user feedback (notifications) is shown and that the
controller is driven correctly, without starting the Textual event loop.
"""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from todosync.app import TodosyncApp
from todosync.models import Priority, Task
from todosync.services import TaskValidationError
from todosync.services.sync_controller import INVALID_PRIORITY_MESSAGE
from todosync.ui.screens.dashboard import DashboardScreen


@pytest.fixture
def app() -> TodosyncApp:
    """App shell with a mocked controller."""
    app = TodosyncApp.__new__(TodosyncApp)
    app.notify = MagicMock()
    app.push_screen = MagicMock()
    app.controller = MagicMock()
    return app


class TestActionsRequireSelection:
    """Actions on the selected task warn when nothing is selected."""

    @pytest.mark.parametrize(
        "action", ["action_edit_task", "action_change_priority", "action_delete_task"]
    )
    def test_warns_without_selection(self, app: TodosyncApp, action: str):
        app.controller.selected_task = None

        getattr(app, action)()

        app.notify.assert_called_once_with("Select a task first", severity="warning")
        app.push_screen.assert_not_called()

    def test_edit_prompt_prefilled(self, app: TodosyncApp):
        app.controller.selected_task = Task(id="srv1", text="Buy milk", priority=Priority.LOW)

        with patch("todosync.app.TextPromptModal") as modal_cls:
            app.action_edit_task()

        modal_cls.assert_called_once_with("Edit task:", default="Buy milk")
        app.push_screen.assert_called_once_with(
            modal_cls.return_value, callback=app._handle_edit
        )

    def test_priority_prompt_prefilled(self, app: TodosyncApp):
        app.controller.selected_task = Task(id="srv1", text="Buy milk", priority=Priority.LOW)

        with patch("todosync.app.TextPromptModal") as modal_cls:
            app.action_change_priority()

        modal_cls.assert_called_once_with("Enter new priority:", default="Low")

    def test_delete_asks_for_confirmation(self, app: TodosyncApp):
        task = Task(id="srv1", text="Buy milk", priority=Priority.MEDIUM)
        app.controller.selected_task = task

        with patch("todosync.app.DeleteTaskModal") as modal_cls:
            app.action_delete_task()

        modal_cls.assert_called_once_with(task)
        app.controller.delete_task.assert_not_called()


class TestPromptCallbacks:
    """Tests for what happens after a modal closes."""

    def test_invalid_priority_shows_error(self, app: TodosyncApp):
        app.controller.change_priority.side_effect = TaskValidationError(INVALID_PRIORITY_MESSAGE)

        app._handle_priority("Urgent")

        app.notify.assert_called_once_with(INVALID_PRIORITY_MESSAGE, severity="error")

    def test_edit_passes_text(self, app: TodosyncApp):
        app._handle_edit("New text")

        app.controller.edit_task.assert_called_once_with("New text")
        app.notify.assert_not_called()

    def test_delete_cancelled(self, app: TodosyncApp):
        app._handle_delete_confirm(False)

        app.controller.delete_task.assert_not_called()

    def test_delete_confirmed(self, app: TodosyncApp):
        app._handle_delete_confirm(True)

        app.controller.delete_task.assert_called_once_with()
        app.notify.assert_called_once_with("Task deleted", timeout=2)


class TestControllerChange:
    """Controller changes re-render the dashboard."""

    def test_dashboard_scheduled_for_render(self, app: TodosyncApp):
        screen = MagicMock(spec=DashboardScreen)
        with patch.object(
            TodosyncApp, "screen_stack", new_callable=PropertyMock, return_value=[screen]
        ):
            app._on_controller_change()

        screen.schedule_render.assert_called_once_with()

    def test_other_screens_ignored(self, app: TodosyncApp):
        screen = MagicMock()
        with patch.object(
            TodosyncApp, "screen_stack", new_callable=PropertyMock, return_value=[screen]
        ):
            app._on_controller_change()

        screen.schedule_render.assert_not_called()
