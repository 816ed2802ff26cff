"""Task list state.

TaskStore holds the ordered task list, applies user actions to it and
persists it through an adapter after every change. Invalid input (blank
text, unknown ids) is ignored rather than reported.

Deleted tasks are kept for a short undo window. Undo puts the task back
at the end of the list; its original position is not restored.
"""

import threading
from collections.abc import Iterator
from datetime import date, datetime
from typing import Callable

from tasklist.config import TaskListSettings, get_settings, validate_settings
from tasklist.due import DueStatus, due_status, is_due_soon, is_overdue
from tasklist.logging import Loggers
from tasklist.models import Task, parse_due_date
from tasklist.persistence import JsonFileAdapter, PersistenceAdapter
from tasklist.undo import Scheduler, UndoTimer

logger = Loggers.store()

UndoExpiredListener = Callable[[Task], None]


class TaskStore:
    """In-memory task list with explicit persistence and undo.

    Example:
        >>> from tasklist.persistence import InMemoryAdapter
        >>> store = TaskStore(InMemoryAdapter())
        >>> task = store.add("Buy milk", "2024-01-10")
        >>> store.toggle_complete(task.id)
        >>> [t.text for t in store.completed_tasks()]
        ['Buy milk']
        >>> store.delete(task.id)
        >>> store.undo()
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        settings: TaskListSettings | None = None,
        undo_timer: UndoTimer | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings or get_settings()
        validate_settings(self._settings)
        self._adapter = adapter
        self._clock = clock
        self._undo_timer = undo_timer or UndoTimer(
            scheduler, delay=self._settings.undo_window_seconds
        )
        self._lock = threading.RLock()
        self._undo_listeners: list[UndoExpiredListener] = []

        self._tasks: list[Task] = list(adapter.load())
        self._last_deleted: Task | None = None
        self._editing_id: int | None = None
        self._last_id = max((t.id for t in self._tasks), default=0)
        logger.info("task_store_ready", count=len(self._tasks))

    @classmethod
    def from_settings(cls, settings: TaskListSettings | None = None, **kwargs) -> "TaskStore":
        """Create a store persisted to the settings' workspace storage file."""
        settings = settings or get_settings()
        return cls(JsonFileAdapter.from_settings(settings), settings=settings, **kwargs)

    # ---- internal helpers ----

    def _next_id(self) -> int:
        candidate = int(self._clock().timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _index_of(self, task_id: int) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _save(self) -> None:
        self._adapter.save(self._tasks)

    def _expire_undo(self, expired: Task) -> None:
        with self._lock:
            if self._last_deleted is not expired:
                return
            self._last_deleted = None
        logger.info("undo_window_expired", task_id=expired.id)
        for listener in list(self._undo_listeners):
            listener(expired)

    # ---- read-only views ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        """All tasks in insertion order."""
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    def active_tasks(self) -> tuple[Task, ...]:
        return tuple(t for t in self._tasks if not t.completed)

    def completed_tasks(self) -> tuple[Task, ...]:
        return tuple(t for t in self._tasks if t.completed)

    @property
    def last_deleted(self) -> Task | None:
        return self._last_deleted

    @property
    def undo_available(self) -> bool:
        return self._last_deleted is not None

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    # ---- mutations ----

    def add(self, text: str, due_date: str | date | None = None) -> Task | None:
        """Append a new active task.

        Args:
            text: Task text. Blank text is ignored.
            due_date: Optional due date, as a date or a raw ``YYYY-MM-DD``
                input string. An empty string means no due date.

        Returns:
            The created task, or None if nothing was added.
        """
        if not text or not text.strip():
            logger.debug("task_add_ignored", reason="empty text")
            return None
        try:
            due = parse_due_date(due_date)
        except (TypeError, ValueError):
            logger.debug("task_add_ignored", reason="invalid due date", due_date=due_date)
            return None

        with self._lock:
            task = Task(
                id=self._next_id(),
                text=text,
                completed=False,
                created_at=self._clock(),
                due_date=due,
            )
            self._tasks.append(task)
            self._save()
        logger.info("task_added", task_id=task.id, due_date=due)
        return task

    def toggle_complete(self, task_id: int) -> Task | None:
        """Flip the completed flag of a task. Unknown ids are ignored."""
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                logger.debug("task_toggle_ignored", task_id=task_id)
                return None
            task = self._tasks[index].toggled()
            self._tasks[index] = task
            self._save()
        logger.info("task_toggled", task_id=task_id, completed=task.completed)
        return task

    def delete(self, task_id: int) -> Task | None:
        """Remove a task and open the undo window for it.

        A previously deleted task that was not restored is dropped for good.

        Returns:
            The removed task, or None if the id is unknown.
        """
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                logger.debug("task_delete_ignored", task_id=task_id)
                return None
            task = self._tasks.pop(index)
            self._last_deleted = task
            if self._editing_id == task_id:
                self._editing_id = None
            self._save()
            self._undo_timer.start(lambda: self._expire_undo(task))
        logger.info("task_deleted", task_id=task_id)
        return task

    def undo(self) -> Task | None:
        """Restore the last deleted task at the end of the list."""
        with self._lock:
            task = self._last_deleted
            if task is None:
                return None
            self._undo_timer.cancel()
            self._last_deleted = None
            self._tasks.append(task)
            self._save()
        logger.info("task_restored", task_id=task.id)
        return task

    def dismiss_undo(self) -> None:
        """Close the undo window early. The deleted task is not restored."""
        with self._lock:
            self._undo_timer.cancel()
            self._last_deleted = None

    def on_undo_expired(self, listener: UndoExpiredListener) -> None:
        """Register a callback run with the task whose undo window lapsed."""
        self._undo_listeners.append(listener)

    def start_edit(self, task_id: int) -> str | None:
        """Open an edit session and return the task's current text."""
        with self._lock:
            task = self.get(task_id)
            if task is None:
                return None
            self._editing_id = task_id
            return task.text

    def cancel_edit(self) -> None:
        with self._lock:
            self._editing_id = None

    def edit(self, task_id: int, new_text: str) -> Task | None:
        """Replace a task's text. Blank text leaves the task unchanged.

        The edit session ends either way.
        """
        with self._lock:
            self._editing_id = None
            if not new_text or not new_text.strip():
                logger.debug("task_edit_ignored", task_id=task_id, reason="empty text")
                return None
            index = self._index_of(task_id)
            if index is None:
                logger.debug("task_edit_ignored", task_id=task_id, reason="unknown id")
                return None
            task = self._tasks[index].with_text(new_text)
            self._tasks[index] = task
            self._save()
        logger.info("task_edited", task_id=task_id)
        return task

    def save_edit(self, new_text: str) -> Task | None:
        """Apply ``new_text`` to the task of the current edit session."""
        with self._lock:
            task_id = self._editing_id
            if task_id is None:
                return None
            return self.edit(task_id, new_text)

    # ---- due dates ----

    def is_due_soon(self, due: date | None) -> bool:
        return is_due_soon(due, self._clock(), self._settings.due_soon_days)

    def is_overdue(self, due: date | None) -> bool:
        return is_overdue(due, self._clock())

    def due_status(self, task: Task) -> DueStatus:
        return due_status(task.due_date, self._clock(), self._settings.due_soon_days)

    def close(self) -> None:
        """Cancel the pending undo timer."""
        self._undo_timer.cancel()
