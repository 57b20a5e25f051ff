"""Task domain model."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .enums import Priority

# Ids minted on this client while offline carry this prefix
LOCAL_ID_PREFIX = "local_"


def generate_local_id() -> str:
    """Generate an id for a task the server has never seen."""
    return f"{LOCAL_ID_PREFIX}{uuid4().hex}"


def is_local_id(task_id: str | int | None) -> bool:
    """Check whether an id was minted locally rather than by the server."""
    return isinstance(task_id, str) and task_id.startswith(LOCAL_ID_PREFIX)


class Task(BaseModel):
    """A single to-do entry.

    The server speaks document-store JSON, so the id is serialized as ``_id``.
    Extra fields returned by the server (timestamps, version counters) are
    dropped.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    # Server id, local id ("local_..."), or None while a create is in flight
    id: str | int | None = Field(default=None, alias="_id")
    text: str
    priority: Priority = Priority.HIGH

    @property
    def is_local(self) -> bool:
        """True if the task was created offline and never acknowledged."""
        return is_local_id(self.id)

    @property
    def is_synced(self) -> bool:
        """True if the task can be addressed on the server."""
        return self.id is not None and not self.is_local

    def to_json(self) -> dict:
        """Convert to the dict used for the wire and the local snapshot."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
