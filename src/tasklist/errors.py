"""Exceptions raised by the task list component."""


class TaskListError(Exception):
    """Base class for task list errors."""


class PersistenceError(TaskListError):
    """Raised when the task list cannot be written to storage."""


class SettingsValidationError(TaskListError):
    """Raised when settings validation fails."""
