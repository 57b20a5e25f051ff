"""todosync - prioritized to-do list with an offline-first sync to a REST API."""

__version__ = "0.1.0"
