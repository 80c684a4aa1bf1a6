"""
pasterbar_core.logger

Logging setup for the clipboard watcher.

`configure_logging` installs a dictConfig with a JSON-lines file handler
(python-json-logger) and an optional human-readable console handler under the
"pasterbar" logger. Library code only calls `get_logger`, so importing the
package never touches the filesystem.
"""

import logging
from logging import Logger as T_Logger
from logging.config import dictConfig
from typing import Optional

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from .config import LoggingSettings, get_settings

LOGGER_NAME = "pasterbar"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> T_Logger:
    """Return the package logger, or a child of it."""
    logger = logging.getLogger(LOGGER_NAME)
    return logger.getChild(name) if name else logger


def configure_logging(settings: Optional[LoggingSettings] = None) -> T_Logger:
    """Configure file and console handlers for the "pasterbar" logger."""
    settings = settings or get_settings(LoggingSettings)
    level = settings.log_level.upper()
    log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handlers = ["file"]
    if settings.console:
        handlers.append("console")

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file),
                "formatter": "json",
                "level": level,
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "handlers": handlers,
                "level": level,
                "propagate": False,
            },
        },
    }

    dictConfig(config)
    logger = get_logger()
    logger.getChild("SYSTEM").debug("Logger for pasterbar initialized.")
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
