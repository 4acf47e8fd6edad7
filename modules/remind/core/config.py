"""
Configuration Management.

Loads settings from config/settings/*.yaml and optional overrides from
REMIND_* environment variables (or config/.env).
Defaults live in the YAML files, not in code.

Settings (YAML):
    application.yaml   - App identity, storage location, note and reminder tuning
    logging.yaml       - Logging configuration

Overrides (environment):
    REMIND_STORAGE_PATH, REMIND_LOG_LEVEL
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.remind.core.config_schema import ApplicationSchema, LoggingSchema
from modules.remind.core.exceptions import ConfigurationError


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides. Every field is optional."""

    storage_path: str | None = None
    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="REMIND_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached override settings. Reads config/.env when present."""
    env_path = find_project_root() / "config" / ".env"
    if env_path.exists():
        return Settings(_env_file=str(env_path))
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_storage_path() -> Path:
    """
    Resolve the preferences file location.

    REMIND_STORAGE_PATH wins over application.yaml. Relative paths are
    resolved against the project root.
    """
    configured = get_settings().storage_path or get_app_config().application.storage.path
    path = Path(configured).expanduser()
    if not path.is_absolute():
        path = find_project_root() / path
    return path
