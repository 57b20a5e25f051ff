"""Screen components."""

from .dashboard import DashboardScreen

__all__ = [
    "DashboardScreen",
]
