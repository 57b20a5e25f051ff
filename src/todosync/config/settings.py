"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    api_url: str = Field(
        default="http://localhost:5000/api",
        description="Base address of the remote tasks API",
    )

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / "todosync",
        description="Directory holding the local storage file",
    )

    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds for remote API calls",
    )

    probe_interval: float = Field(
        default=5.0,
        description="Seconds between connectivity probes",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TODOSYNC_",
    }
