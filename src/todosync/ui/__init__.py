"""UI components."""

from .screens.dashboard import DashboardScreen
from .widgets.priority_column import PriorityColumn
from .widgets.task_card import TaskCard

__all__ = [
    "DashboardScreen",
    "PriorityColumn",
    "TaskCard",
]
