"""Configuration service for smart-todo.

Single source of truth for the on-disk ``config.json``:

- Loading it lazily, writing defaults on first run
- Dotted-key get/set (``assistant.timeout``) validated through ``AppConfig``
- Resolving the database path
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError as PydanticValidationError

from smart_todo.exceptions import SmartTodoError, ValidationError
from smart_todo.models.config_models import AppConfig

APP_DIR_NAME = "smart_todo"
DEFAULT_DB_NAME = "smart-todo.db"


class ConfigService:
    """Service for loading, editing and saving application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir(APP_DIR_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_DIR_NAME))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except (OSError, PydanticValidationError) as e:
            raise SmartTodoError(f"Failed to load config {self.config_path}: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise SmartTodoError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a value by dotted key, e.g. ``assistant.model``.

        Raises:
            ValidationError: If the key does not exist
        """
        value: Any = self.config.model_dump()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                raise ValidationError(f"Unknown configuration key: {key}")
            value = value[part]
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a value by dotted key and save; the result is re-validated.

        Raises:
            ValidationError: If the key is unknown or the value is invalid
        """
        self.get(key)  # Rejects unknown keys

        data = self.config.model_dump()
        parts = key.split(".")
        target = data
        for part in parts[:-1]:
            target = target[part]
        target[parts[-1]] = value

        try:
            self._config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e

        self.save_config()
        return self._config

    def get_database_path(self) -> Path:
        """Configured database path, or the default inside the user data dir."""
        if self.config.database_path:
            return Path(self.config.database_path).expanduser()
        return self.data_dir / DEFAULT_DB_NAME


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
