"""Tests for structured logging configuration."""

import json
from datetime import date, datetime

import pytest
import structlog

from tasklist.config import TaskListSettings
from tasklist.logging import Loggers, configure_logging, get_logger, render_dates


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_output(self, temp_workspace, capsys):
        settings = TaskListSettings(
            workspace_dir=temp_workspace, log_level="info", log_format="json"
        )
        configure_logging(settings)

        get_logger("tasklist.test").info("task_added", task_id=42)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "task_added"
        assert record["task_id"] == 42
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filtering(self, temp_workspace, capsys):
        settings = TaskListSettings(
            workspace_dir=temp_workspace, log_level="warning", log_format="json"
        )
        configure_logging(settings)

        logger = get_logger("tasklist.test")
        logger.info("quiet")
        logger.warning("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_defaults_without_settings(self, capsys):
        configure_logging()
        get_logger().warning("console_output")
        assert "console_output" in capsys.readouterr().err

    def test_component_bound_from_logger_name(self, temp_workspace, capsys):
        settings = TaskListSettings(
            workspace_dir=temp_workspace, log_level="info", log_format="json"
        )
        configure_logging(settings)

        Loggers.store().info("task_toggled", task_id=7)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["component"] == "tasklist.store"
        assert record["task_id"] == 7

    def test_dates_rendered_as_iso(self, temp_workspace, capsys):
        settings = TaskListSettings(
            workspace_dir=temp_workspace, log_level="info", log_format="json"
        )
        configure_logging(settings)

        get_logger("tasklist.test").info(
            "task_added",
            due_date=date(2024, 1, 10),
            created_at=datetime(2024, 1, 8, 10, 30),
        )

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["due_date"] == "2024-01-10"
        assert record["created_at"] == "2024-01-08T10:30:00"


class TestRenderDates:
    def test_leaves_other_values_alone(self):
        event = {"event": "x", "task_id": 1, "due_date": None, "day": date(2024, 2, 29)}
        assert render_dates(None, "info", event) == {
            "event": "x",
            "task_id": 1,
            "due_date": None,
            "day": "2024-02-29",
        }
