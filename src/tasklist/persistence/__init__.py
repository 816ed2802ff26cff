"""Persistence adapters for the task list."""

from tasklist.errors import PersistenceError
from tasklist.persistence.adapters import (
    DEFAULT_STORAGE_KEY,
    InMemoryAdapter,
    JsonFileAdapter,
    KeyValueAdapter,
    PersistenceAdapter,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InMemoryAdapter",
    "JsonFileAdapter",
    "KeyValueAdapter",
    "PersistenceAdapter",
    "PersistenceError",
]
