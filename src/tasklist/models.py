"""Task record and its serialized form.

A task is stored as a JSON object with the fields
``id, text, completed, createdAt, dueDate``. ``createdAt`` is an ISO-8601
datetime string and ``dueDate`` an ISO calendar date (``YYYY-MM-DD``) or null.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any


def parse_due_date(raw: str | date | None) -> date | None:
    """Parse a due date as received from a date input field.

    Empty and whitespace-only strings mean "no due date". Datetime strings
    are accepted and reduced to their calendar date.

    Raises:
        ValueError: If the value is not a recognisable date.
        TypeError: If the value is neither a string nor a date.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"due date must be a string or date, got {type(raw).__name__}")
    value = raw.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


@dataclass(frozen=True)
class Task:
    """A single to-do item."""

    id: int
    text: str
    completed: bool = False
    created_at: datetime | None = None
    due_date: date | None = None

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)

    def with_text(self, text: str) -> "Task":
        return replace(self, text=text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its stored form.

        Raises:
            KeyError: If ``id`` or ``text`` is missing.
            ValueError: If ``id`` is not an integer, ``text`` is empty or a
                date field cannot be parsed.
        """
        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"task id must be an integer, got {raw_id!r}")
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task {raw_id} has empty text")
        created_raw = data.get("createdAt")
        return cls(
            id=raw_id,
            text=text,
            completed=bool(data.get("completed", False)),
            created_at=datetime.fromisoformat(created_raw) if created_raw else None,
            due_date=parse_due_date(data.get("dueDate")),
        )
