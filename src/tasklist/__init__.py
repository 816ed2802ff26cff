"""tasklist - A small task list state machine with local persistence.

This package provides:

- TaskStore: add, toggle, edit, delete and undo over an ordered task list
- Persistence adapters for a local key-value store (JSON file or in-memory)
- A single cancel-and-replace undo timer
- Due-date classification (due soon / overdue) and a rich-based view
"""

from tasklist.config import (
    TaskListSettings,
    SettingsContext,
    get_settings,
    set_settings,
    set_context_settings,
    get_context_settings,
    validate_settings,
    reload_settings,
)
from tasklist.due import DueStatus, format_due_date, is_due_soon, is_overdue
from tasklist.errors import PersistenceError, SettingsValidationError, TaskListError
from tasklist.logging import configure_logging
from tasklist.models import Task, parse_due_date
from tasklist.persistence import InMemoryAdapter, JsonFileAdapter, KeyValueAdapter
from tasklist.store import TaskStore
from tasklist.undo import ThreadingScheduler, UndoTimer
from tasklist.view import TaskListView

__all__ = [
    # Store
    "TaskStore",
    "Task",
    "parse_due_date",
    # Due dates
    "DueStatus",
    "format_due_date",
    "is_due_soon",
    "is_overdue",
    # Persistence
    "InMemoryAdapter",
    "JsonFileAdapter",
    "KeyValueAdapter",
    # Undo
    "ThreadingScheduler",
    "UndoTimer",
    # View
    "TaskListView",
    # Settings
    "TaskListSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "validate_settings",
    "reload_settings",
    "configure_logging",
    # Errors
    "TaskListError",
    "PersistenceError",
    "SettingsValidationError",
]

__version__ = "0.1.0"
