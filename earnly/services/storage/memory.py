"""In-memory storage backend, used by tests and the 'memory' storage setting."""

import copy
from typing import Any, Optional

from earnly.services.storage.interface import StateStorageInterface


class InMemoryStateStorage(StateStorageInterface):
    """Keeps a deep copy of the last saved values."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.write_count = 0

    def load_all(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def save_all(self, values: dict[str, Any]) -> None:
        self._values = copy.deepcopy(values)
        self.write_count += 1

    def clear(self) -> None:
        self._values = {}
