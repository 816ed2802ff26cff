"""Shared test fixtures and utilities for tasklist tests.

Provides:
- MockContext for isolating tests from global settings
- FakeClock and ManualScheduler for driving time by hand
- Store fixtures wired to both
"""

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import patch

import pytest

from tasklist.config import (
    TaskListSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from tasklist.persistence import InMemoryAdapter
from tasklist.store import TaskStore


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Cleaning up after tests

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: TaskListSettings | None = None
        self._env_patch = None

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        # Hide any TASKLIST_* variables from the developer's environment
        clean_env = {k: v for k, v in os.environ.items() if not k.startswith("TASKLIST_")}
        self._env_patch = patch.dict(os.environ, clean_env, clear=True)
        self._env_patch.start()

        self._settings = TaskListSettings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        if self._env_patch is not None:
            self._env_patch.stop()
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> TaskListSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose callbacks run only when elapse() passes their delay."""

    def __init__(self) -> None:
        self.elapsed = 0.0
        self.handles: list[ManualHandle] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.elapsed + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def elapse(self, seconds: float) -> None:
        self.elapsed += seconds
        for handle in self.pending:
            if handle.due <= self.elapsed:
                handle.fired = True
                handle.callback()


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 8, 10, 30))


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def adapter() -> InMemoryAdapter:
    return InMemoryAdapter()


@pytest.fixture
def store(mock_context, adapter, scheduler, clock) -> Generator[TaskStore, None, None]:
    """Fixture providing an empty store driven by the fake clock and scheduler."""
    task_store = TaskStore(
        adapter,
        settings=mock_context.settings,
        scheduler=scheduler,
        clock=clock,
    )
    yield task_store
    task_store.close()
