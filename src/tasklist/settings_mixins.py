"""Settings mixins for storage layout, task behaviour and logging.

StorageSettingsMixin: Application identity and disk layout (app_name, workspace, storage file).
TaskBehaviourSettingsMixin: Undo window and due-date horizon.
LoggingSettingsMixin: Log level and output format.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class StorageSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with TaskListSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="tasklist",
        title="App Name",
        description="Application name used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".tasklist",
        title="Workspace Directory",
        description="Directory holding the local key-value storage file",
    )

    storage_file: str = Field(
        default="storage.json",
        title="Storage File",
        description="Key-value storage file name, relative to the workspace",
    )

    storage_key: str = Field(
        default="tasks",
        title="Storage Key",
        description="Key under which the task list is stored",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def storage_path(self) -> Path:
        """Path of the key-value storage file."""
        return self.workspace_dir / self.storage_file


class TaskBehaviourSettingsMixin:
    """Settings for undo and due-date behaviour."""

    undo_window_seconds: float = Field(
        default=5.0,
        title="Undo Window",
        description="Seconds during which a deleted task can be restored",
    )

    due_soon_days: int = Field(
        default=2,
        title="Due Soon Horizon",
        description="Days ahead within which a due date counts as due soon",
    )


class LoggingSettingsMixin:
    """Settings for log output.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
