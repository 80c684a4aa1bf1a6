"""
Core package for the pasterbar clipboard history watcher.

This package contains configuration (pydantic-settings), constants, logging
setup, the SQLAlchemy base and history entity, and the HistoryStore that owns
the on-disk clipboard history.
"""

from . import constants  # noqa: F401
from .config import (  # noqa: F401
    AppSettings,
    ClipboardWatcherSettings,
    HistoryStoreSettings,
    LoggingSettings,
    get_settings,
)
from .constants import ClipboardType  # noqa: F401
from .logger import configure_logging, get_logger  # noqa: F401
from .models import ClipboardHistory, ClipboardHistoryEntity  # noqa: F401
from .store import HistoryStore  # noqa: F401

__version__ = "0.1.0"
