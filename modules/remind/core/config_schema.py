"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class StorageSchema(_StrictBase):
    path: str


class NotesSchema(_StrictBase):
    max_active: int = Field(ge=1)
    list_snooze_minutes: int = Field(ge=1)


class NotificationsSchema(_StrictBase):
    high_risk_interval_seconds: int = Field(ge=60)
    snooze_minutes: int = Field(ge=1)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    storage: StorageSchema
    notes: NotesSchema
    notifications: NotificationsSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema
