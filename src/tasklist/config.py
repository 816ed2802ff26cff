"""Configuration for the task list component.

Provides TaskListSettings, the single settings class used by the store,
its persistence adapters and the presentation layer.

Settings Management:
    The module provides both global singleton and context-based settings:

    1. Global singleton (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (isolated contexts, tests):
        with SettingsContext(my_settings):
            # Code here sees my_settings via get_settings()
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Environment variables (TASKLIST_* prefix)
    2. Project config (./.{app_name}/settings.json)
    3. User config (~/.{app_name}/settings.json)
    4. .env file
    5. Default values
"""

from contextvars import ContextVar, Token
from pathlib import Path
from typing import Generator, Tuple, Type
from contextlib import contextmanager

from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

from tasklist.errors import SettingsValidationError
from tasklist.logging import Loggers
from tasklist.settings_mixins import (
    LoggingSettingsMixin,
    StorageSettingsMixin,
    TaskBehaviourSettingsMixin,
)

__all__ = [
    "TaskListSettings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "validate_settings",
    "reload_settings",
]

logger = Loggers.config()


def _get_json_config_source(
    settings_cls: Type[PydanticBaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists.

    Args:
        settings_cls: The settings class
        json_file: Path to JSON config file

    Returns:
        JsonConfigSettingsSource if file exists, None otherwise
    """
    if not json_file.exists():
        return None

    from pydantic_settings import JsonConfigSettingsSource

    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class TaskListSettings(
    StorageSettingsMixin,
    TaskBehaviourSettingsMixin,
    LoggingSettingsMixin,
    PydanticBaseSettings,
):
    """Settings for the task list component.

    Settings are loaded from (in order of precedence):
    1. Constructor arguments
    2. Environment variables (TASKLIST_ prefix)
    3. Project config (./.{app_name}/settings.json)
    4. User config (~/.{app_name}/settings.json)
    5. .env file
    6. Default values

    Mixins provide organized settings:
    - StorageSettingsMixin: Workspace directory and storage key
    - TaskBehaviourSettingsMixin: Undo window and due-date horizon
    - LoggingSettingsMixin: Log level and format
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKLIST_",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources for layered JSON configuration.

        Priority (highest to lowest):
            1. init_settings (constructor arguments)
            2. env_settings (environment variables)
            3. project_json (./.app_name/settings.json)
            4. user_json (~/.app_name/settings.json)
            5. dotenv_settings (.env file)

        Note: JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        app_name = "tasklist"
        if hasattr(cls, "model_fields") and "app_name" in cls.model_fields:
            field_info = cls.model_fields["app_name"]
            if field_info.default and field_info.default != ...:
                app_name = field_info.default

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{app_name}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{app_name}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Context variable for settings (takes precedence over global singleton)
_settings_context: ContextVar[TaskListSettings | None] = ContextVar(
    "settings_context", default=None
)

# Global settings instance holder (fallback when no context)
_settings_instance: TaskListSettings | None = None


def get_settings() -> TaskListSettings:
    """Get the current settings instance.

    Settings resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global singleton (set via set_settings)
    3. Fresh TaskListSettings instance (created on first access)

    Returns:
        TaskListSettings instance for the current context
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = TaskListSettings()
    return _settings_instance


def set_settings(settings: TaskListSettings) -> None:
    """Set the global settings instance.

    Note: For isolated contexts (e.g., testing), prefer using
    SettingsContext instead.

    Args:
        settings: Settings instance to use globally
    """
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: TaskListSettings | None) -> Token:
    """Set settings for the current context.

    Args:
        settings: Settings to use in current context, or None to clear

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


def get_context_settings() -> TaskListSettings | None:
    """Get settings from current context (if any)."""
    return _settings_context.get()


@contextmanager
def SettingsContext(settings: TaskListSettings) -> Generator[TaskListSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            store = TaskStore.from_settings()  # Uses test_settings

    Args:
        settings: Settings to use within the context

    Yields:
        The settings instance
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> TaskListSettings:
    """Reload settings (clears global singleton and context cache).

    Returns:
        Fresh TaskListSettings instance
    """
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()


def validate_settings(settings: TaskListSettings) -> None:
    """Validate settings for runtime use.

    Checks the values the store depends on:
    - Undo window must be positive
    - Due-soon horizon must not be negative
    - Storage key must not be blank

    Args:
        settings: Settings to validate

    Raises:
        SettingsValidationError: If validation fails
    """
    errors = []

    if settings.undo_window_seconds <= 0:
        errors.append(
            f"undo_window_seconds must be positive, got {settings.undo_window_seconds}"
        )

    if settings.due_soon_days < 0:
        errors.append(f"due_soon_days must not be negative, got {settings.due_soon_days}")

    if not settings.storage_key.strip():
        errors.append("storage_key must not be empty")

    if errors:
        logger.warning("settings_invalid", errors=errors)
        raise SettingsValidationError("\n".join(errors))
