"""Enums for task priority and connectivity."""

from enum import Enum


class Priority(str, Enum):
    """Priority buckets for tasks."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Connectivity(str, Enum):
    """Whether the remote API is believed to be reachable."""

    ONLINE = "online"
    OFFLINE = "offline"
