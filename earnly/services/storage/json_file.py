"""
JSON File Storage Implementation

DESIGN DECISION: Ledger state lives in a single local JSON document
because:
1. A personal tracker has a few kilobytes of state
2. One document means one write per mutation
3. The file is human-readable for debugging and backup

Writes go to a temporary file in the same directory and are then
renamed over the document, so a crash mid-write never leaves a
half-written state file behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from earnly.services.storage.interface import (
    CorruptDataError,
    StateStorageInterface,
    StorageError,
)


class JsonFileStateStorage(StateStorageInterface):
    """
    Stores ledger state as one JSON object with a top-level key per
    logical key.
    """

    def __init__(self, path: Path, write_attempts: int = 3):
        self._path = Path(path)
        self._write_attempts = write_attempts

    @property
    def path(self) -> Path:
        return self._path

    def load_all(self) -> dict[str, Any]:
        """Read the document; an absent file is an empty store."""
        if not self._path.exists():
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"State file is not valid JSON: {self._path}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read state file {self._path}: {e}")

        if not isinstance(data, dict):
            raise CorruptDataError(
                f"State file must hold a JSON object, found {type(data).__name__}"
            )
        return data

    def save_all(self, values: dict[str, Any]) -> None:
        """Write the document, retrying transient OS errors."""
        writer = retry(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_fixed(0.05),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )(self._write)

        try:
            writer(values)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write state file {self._path}: {e}")

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove state file {self._path}: {e}")

    def _write(self, values: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
