"""
Abstract Storage Interface

DESIGN DECISION: Ledger state is persisted through a small key-value
interface. This allows us to:
1. Use a local JSON document in the app
2. Use in-memory storage for testing
3. Swap in another backend without touching the ledger

Values are JSON-compatible Python objects (dicts, lists, strings,
numbers, None). Encoding domain models into those values is the
ledger repository's job, not the backend's.
"""

from abc import ABC, abstractmethod
from typing import Any


class StateStorageInterface(ABC):
    """
    Abstract interface for ledger state storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_all(self) -> dict[str, Any]:
        """
        Load every stored key.

        Returns:
            Mapping of logical key to stored value; empty if nothing
            has been stored yet

        Raises:
            CorruptDataError: If stored data exists but cannot be decoded
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_all(self, values: dict[str, Any]) -> None:
        """
        Replace the stored keys with `values` in one write.

        Args:
            values: Mapping of logical key to JSON-compatible value

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all stored keys."""
        pass

    def load(self, key: str) -> Any:
        """Load a single key, or None if absent."""
        return self.load_all().get(key)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but could not be decoded."""
    pass
