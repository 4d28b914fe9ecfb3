"""Configuration service for managing Taskflow CLI configuration.

Single source of truth for ``config.json``:

- Loading and saving the file (created with defaults on first run)
- Dot-separated ``get`` / ``set`` / ``reset`` of individual keys
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from taskflow_cli.models.config_models import AppConfig

logger = logging.getLogger(__name__)


class ConfigKeyError(KeyError):
    """Raised for a dot-separated key that names no setting."""


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self, config_dir: Path | None = None, data_dir: Path | None = None):
        """Initialize the config service."""
        self.config_dir = config_dir or Path(user_config_dir("taskflow_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = data_dir or Path(user_data_dir("taskflow_cli"))

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
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    @property
    def database_path(self) -> Path:
        """SQLite file for tasks and history."""
        if self.config.storage.path:
            return Path(self.config.storage.path).expanduser()
        return self.data_dir / "taskflow.db"

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> Any:
        """Set a configuration value by dot-separated key.

        Returns the stored value after validation (which may clamp it).

        Raises:
            ConfigKeyError: If ``key`` names no setting.
            ValueError: If ``value`` fails validation.
        """
        self.get(key)
        keys = key.split(".")
        config_dict = self.config.model_dump(mode="json")

        current = config_dict
        for part in keys[:-1]:
            current = current[part]
        current[keys[-1]] = value

        try:
            new_config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e.errors()[0]['msg']}") from e

        self._config = new_config
        self.save_config()
        logger.info("Config %s updated", key)
        return self.get(key)

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        default_value = self.get_from_config(AppConfig(), key)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump(mode="json")
        elif hasattr(default_value, "value"):
            default_value = default_value.value
        self.set(key, default_value)

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise ConfigKeyError(key)
            value = getattr(value, part)
        return value

    def as_dict(self) -> dict:
        return json.loads(self.config.model_dump_json())


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
