"""Widget components."""

from .delete_task_modal import DeleteTaskModal
from .priority_column import EmptyColumnMessage, PriorityColumn
from .task_card import TaskCard
from .text_prompt_modal import TextPromptModal

__all__ = [
    "DeleteTaskModal",
    "EmptyColumnMessage",
    "PriorityColumn",
    "TaskCard",
    "TextPromptModal",
]
