"""Persistence adapters for the task list.

The store only needs two calls: ``load()`` once at startup and
``save(tasks)`` after each mutation. The whole list is kept as one JSON
array under a single key of a key-value storage, the way a browser keeps
it in ``localStorage``.

Storage layouts:
    KeyValueAdapter / InMemoryAdapter:
        backend[key] = '[{"id": ..., "text": ..., ...}, ...]'

    JsonFileAdapter:
        {workspace_dir}/storage.json
        {"tasks": [{"id": ..., "text": ..., ...}, ...]}
"""

import json
from collections.abc import MutableMapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from tasklist.errors import PersistenceError
from tasklist.logging import Loggers
from tasklist.models import Task
from tasklist.persistence._utils import atomic_write_json

if TYPE_CHECKING:
    from tasklist.config import TaskListSettings

logger = Loggers.persistence()

DEFAULT_STORAGE_KEY = "tasks"


class PersistenceAdapter(Protocol):
    """Load/save contract used by TaskStore."""

    def load(self) -> list[Task]: ...

    def save(self, tasks: Sequence[Task]) -> None: ...


def decode_tasks(records: Any, source: str) -> list[Task]:
    """Decode stored records, skipping the ones that are not valid tasks."""
    if not isinstance(records, list):
        logger.warning("stored_tasks_not_a_list", source=source, type=type(records).__name__)
        return []

    tasks: list[Task] = []
    seen: set[int] = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("stored_task_skipped", source=source, index=index, reason="not an object")
            continue
        try:
            task = Task.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("stored_task_skipped", source=source, index=index, reason=str(e))
            continue
        if task.id in seen:
            logger.warning("stored_task_skipped", source=source, index=index, reason="duplicate id")
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks


def encode_tasks(tasks: Sequence[Task]) -> list[dict[str, Any]]:
    return [task.to_dict() for task in tasks]


class KeyValueAdapter:
    """Stores the task list as a JSON string under one key of a mapping.

    Example:
        >>> backend: dict[str, str] = {}
        >>> adapter = KeyValueAdapter(backend)
        >>> adapter.save([Task(id=1, text="Buy milk")])
        >>> adapter.load()[0].text
        'Buy milk'
    """

    def __init__(
        self,
        backend: MutableMapping[str, str],
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.backend = backend
        self.key = key

    def load(self) -> list[Task]:
        raw = self.backend.get(self.key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("stored_tasks_unreadable", key=self.key, error=str(e))
            return []
        return decode_tasks(records, source=self.key)

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            self.backend[self.key] = json.dumps(encode_tasks(tasks))
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to store tasks under {self.key!r}: {e}") from e
        logger.debug("tasks_saved", key=self.key, count=len(tasks))


class InMemoryAdapter(KeyValueAdapter):
    """Key-value adapter over a private dict. Nothing survives the process."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__({}, key)


class JsonFileAdapter:
    """Stores the task list under one key of a JSON object file.

    Other keys in the file are preserved on save, so several components
    can share one storage file.
    """

    def __init__(self, path: Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    @classmethod
    def from_settings(cls, settings: "TaskListSettings") -> "JsonFileAdapter":
        return cls(settings.storage_path, settings.storage_key)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("storage_file_unreadable", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_file_not_an_object", path=str(self.path))
            return {}
        return data

    def load(self) -> list[Task]:
        data = self._read_all()
        if self.key not in data:
            return []
        tasks = decode_tasks(data[self.key], source=f"{self.path}:{self.key}")
        logger.info("tasks_loaded", path=str(self.path), key=self.key, count=len(tasks))
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        data = self._read_all()
        data[self.key] = encode_tasks(tasks)
        try:
            atomic_write_json(self.path, data)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e
        logger.debug("tasks_saved", path=str(self.path), key=self.key, count=len(tasks))
