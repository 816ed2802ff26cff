"""Tests for the Task record and due-date input parsing."""

from datetime import date, datetime

import pytest

from tasklist.models import Task, parse_due_date


class TestParseDueDate:
    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_input_means_no_date(self, raw):
        assert parse_due_date(raw) is None

    def test_iso_date(self):
        assert parse_due_date("2024-01-10") == date(2024, 1, 10)

    def test_iso_date_with_whitespace(self):
        assert parse_due_date(" 2024-01-10 ") == date(2024, 1, 10)

    def test_datetime_string_keeps_date(self):
        assert parse_due_date("2024-01-10T15:45:00") == date(2024, 1, 10)

    def test_date_and_datetime_objects(self):
        assert parse_due_date(date(2024, 3, 1)) == date(2024, 3, 1)
        assert parse_due_date(datetime(2024, 3, 1, 9, 0)) == date(2024, 3, 1)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_due_date("tomorrow")


class TestTask:
    def test_to_dict_uses_stored_field_names(self):
        task = Task(
            id=1704700000000,
            text="Buy milk",
            completed=False,
            created_at=datetime(2024, 1, 8, 10, 30),
            due_date=date(2024, 1, 10),
        )
        assert task.to_dict() == {
            "id": 1704700000000,
            "text": "Buy milk",
            "completed": False,
            "createdAt": "2024-01-08T10:30:00",
            "dueDate": "2024-01-10",
        }

    def test_to_dict_without_due_date(self):
        assert Task(id=1, text="x").to_dict()["dueDate"] is None

    def test_from_dict_defaults(self):
        task = Task.from_dict({"id": 5, "text": "Minimal"})
        assert task.completed is False
        assert task.created_at is None
        assert task.due_date is None

    def test_from_dict_reads_utc_timestamps(self):
        task = Task.from_dict(
            {"id": 5, "text": "From browser", "createdAt": "2024-01-08T10:30:00.000Z"}
        )
        assert task.created_at.year == 2024
        assert task.created_at.utcoffset().total_seconds() == 0

    def test_from_dict_rejects_empty_text(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": 5, "text": "  "})

    def test_from_dict_rejects_non_integer_id(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": "abc", "text": "x"})

    def test_from_dict_missing_id(self):
        with pytest.raises(KeyError):
            Task.from_dict({"text": "x"})

    def test_toggled_and_with_text_return_copies(self):
        task = Task(id=1, text="a")
        assert task.toggled().completed is True
        assert task.completed is False
        assert task.with_text("b").text == "b"
        assert task.text == "a"
