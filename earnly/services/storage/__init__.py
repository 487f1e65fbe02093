"""
Storage Services Package

Provides the abstract state storage interface and its implementations:
a local JSON document for the app and an in-memory store for tests.
"""

from earnly.services.storage.interface import (
    CorruptDataError,
    StateStorageInterface,
    StorageError,
)
from earnly.services.storage.json_file import JsonFileStateStorage
from earnly.services.storage.memory import InMemoryStateStorage

__all__ = [
    # Interface
    "StateStorageInterface",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Implementations
    "InMemoryStateStorage",
    "JsonFileStateStorage",
]
