"""File-backed key/value store modelled on browser localStorage."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorageError(Exception):
    """The storage file exists but cannot be read as a key/value object."""

    pass


class LocalStorage:
    """
    String key/value pairs persisted as a single JSON object.

    Values are opaque strings, as in the browser API; callers serialize
    their own data. Every write rewrites the whole file atomically.
    """

    FILENAME = "storage.json"

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.path = data_dir / self.FILENAME

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise LocalStorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise LocalStorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file then swap, so a crash never leaves half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        try:
            data = self._read_all()
        except LocalStorageError:
            logger.warning("Discarding unreadable storage file %s", self.path)
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
