"""
Configuration Schemas.

One strict pydantic model per file in config/settings/. Unknown keys,
missing keys and wrong types are rejected when AppConfig loads, so a
typo in storage.yaml stops the program at startup.

    ApplicationSchema  -> application.yaml
    StorageSchema      -> storage.yaml
    LoggingSchema      -> logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# application.yaml
# =============================================================================


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    title: str


# =============================================================================
# storage.yaml
# =============================================================================


class LocalStorageSchema(_StrictBase):
    path: str
    echo: bool


class RetrySchema(_StrictBase):
    max_attempts: int
    backoff_multiplier: float
    backoff_max: float


class RemoteStorageSchema(_StrictBase):
    base_url: str
    notes_path: str
    timeout: float
    retry: RetrySchema


class StorageSchema(_StrictBase):
    backend: Literal["local", "remote"]
    local: LocalStorageSchema
    remote: RemoteStorageSchema


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
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema
