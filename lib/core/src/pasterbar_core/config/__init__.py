"""
pasterbar_core.config
Configuration and settings management for the clipboard history watcher.
Overview:
- Provides Pydantic-based settings classes for each component of the watcher.
- Each settings class inherits from FactoryBaseSettings and supports environment variable
    overrides via Field aliases, YAML files in the data directory, and a .env file.
Contents:
- Settings Classes:
    - AppSettings:
        Data root, environment, and derived directories (logs).
    - ClipboardWatcherSettings:
        Clipboard sampling period, history refresh period, managed image directory,
        and the set of file extensions classified as images.
    - HistoryStoreSettings:
        Location of the SQLite history database and the derived SQLAlchemy URL.
    - LoggingSettings:
        Log level and JSON-lines log file location.
Design Notes:
- Default values are provided for all fields enabling zero-configuration startup.
- Path fields accept both strings and Path objects and expand "~".
"""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from ..constants import DATABASE_FILENAME, IMAGE_DIRECTORY_NAME, IMAGE_EXTENSIONS
from .base import APP_ENV, APP_NAME, APP_ROOT, AppEnv
from .factory import FactoryBaseSettings
from .factory import get_settings  # noqa: F401  This is used externally


class AppSettings(FactoryBaseSettings):
    """Application configuration settings."""

    app_root: Path = Field(
        default=APP_ROOT,
        description="Root directory for application data storage.",
        alias="PASTERBAR_HOME",
    )
    environment: str = Field(
        default=APP_ENV,
        description="Current application environment (prod, dev, test).",
        alias="PASTERBAR_ENV",
    )

    @property
    def logs_dir(self) -> Path:
        """Base directory for logs."""
        return self.app_root / "logs"


class ClipboardWatcherSettings(FactoryBaseSettings):
    """
    Configuration for the Clipboard Watcher Service.
    """

    poll_interval: float = Field(
        default=1.5,
        gt=0,
        description="Interval for sampling the clipboard change counter. (Seconds) [Default: 1.5]",
        alias="PASTERBAR_POLL_INTERVAL",
    )
    refresh_interval: float = Field(
        default=1.0,
        gt=0,
        description="Interval for reloading the history snapshot. (Seconds) [Default: 1.0]",
        alias="PASTERBAR_REFRESH_INTERVAL",
    )
    image_directory: Path = Field(
        default=APP_ROOT / IMAGE_DIRECTORY_NAME,
        description="Managed directory where clipboard images are materialized.",
        alias="PASTERBAR_IMAGE_DIRECTORY",
    )
    image_extensions: Annotated[tuple[str, ...], NoDecode] = Field(
        default=IMAGE_EXTENSIONS,
        description="File extensions (without dot, lowercase) classified as images.",
        alias="PASTERBAR_IMAGE_EXTENSIONS",
    )

    @field_validator("image_directory", mode="before")
    def expand_directory(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("image_extensions", mode="before")
    def parse_extensions(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set)):
            return tuple(str(ext).strip().lstrip(".").lower() for ext in v if str(ext).strip())
        return v


class HistoryStoreSettings(FactoryBaseSettings):
    """
    Configuration for the history database.
    """

    database_path: Path = Field(
        default=APP_ROOT / DATABASE_FILENAME,
        description="Path to the SQLite file holding clipboard history.",
        alias="PASTERBAR_DATABASE_PATH",
    )
    echo: bool = Field(
        default=False,
        description="Echo SQL statements emitted by SQLAlchemy.",
        alias="PASTERBAR_DATABASE_ECHO",
    )

    @field_validator("database_path", mode="before")
    def expand_path(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the history database."""
        return f"sqlite:///{self.database_path.as_posix()}"


class LoggingSettings(FactoryBaseSettings):
    """
    Logging configuration settings.
    """

    log_level: str = Field(
        default="info",
        description="Log level for the watcher.",
        alias="PASTERBAR_LOG_LEVEL",
    )
    log_file: Path = Field(
        default=APP_ROOT / "logs" / f"{APP_NAME}.jsonl",
        description="JSON-lines log file.",
        alias="PASTERBAR_LOG_FILE",
    )
    console: bool = Field(
        default=True,
        description="Also log human-readable lines to stderr.",
        alias="PASTERBAR_LOG_CONSOLE",
    )


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "AppEnv",
    "AppSettings",
    "ClipboardWatcherSettings",
    "FactoryBaseSettings",
    "HistoryStoreSettings",
    "LoggingSettings",
    "get_settings",
]
