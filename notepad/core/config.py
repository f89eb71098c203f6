"""
Configuration Management.

Two sources, both under the project root:

    config/.env              secrets (NOTES_API_TOKEN), read by Settings
    config/settings/*.yaml   everything else, validated by config_schema

    application.yaml   name, version, window title
    storage.yaml       which note store to use and how to reach it
    logging.yaml       level, format and handlers

The project root is the nearest ancestor of the working directory that
holds a .project_root marker.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notepad.core.config_schema import (
    ApplicationSchema,
    LoggingSchema,
    StorageSchema,
)

PROJECT_MARKER = ".project_root"
SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    for directory in (Path.cwd(), *Path.cwd().parents):
        if (directory / PROJECT_MARKER).exists():
            return directory
    raise RuntimeError(
        f"Project root not found. Create a {PROJECT_MARKER} file at the repository root."
    )


def load_yaml_config(filename: str) -> dict[str, Any]:
    """
    Read one settings file as a dict.

    An empty file yields {}.

    Raises:
        FileNotFoundError: If config/settings/<filename> does not exist
    """
    path = find_project_root() / SETTINGS_DIR / filename
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets only. Everything that is not secret belongs in YAML."""

    notes_api_token: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    Validated view of config/settings.

    All three files are read and checked on construction, so a bad file
    fails at startup rather than on first use.
    """

    def __init__(self) -> None:
        self._application: ApplicationSchema = _load_validated(
            ApplicationSchema, "application.yaml"
        )
        self._storage: StorageSchema = _load_validated(StorageSchema, "storage.yaml")
        self._logging: LoggingSchema = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        return self._application

    @property
    def storage(self) -> StorageSchema:
        return self._storage

    @property
    def logging(self) -> LoggingSchema:
        return self._logging


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / ENV_FILE))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def get_local_database_url() -> str:
    """
    SQLAlchemy URL of the local note store.

    storage.local.path is relative to the project root. Its parent
    directory is created so SQLite can create the file.
    """
    db_path = find_project_root() / get_app_config().storage.local.path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path}"


def get_remote_base_url() -> tuple[str, float]:
    """Return (base_url without trailing slash, timeout in seconds) for the remote store."""
    remote = get_app_config().storage.remote
    return remote.base_url.rstrip("/"), float(remote.timeout)
