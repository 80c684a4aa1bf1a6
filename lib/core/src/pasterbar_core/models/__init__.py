"""
pasterbar_core.models
ORM entities and Pydantic models for the clipboard history watcher.
"""

from .history import ClipboardHistory, ClipboardHistoryEntity  # noqa: F401

__entities__ = ["ClipboardHistoryEntity"]
__models__ = ["ClipboardHistory"]
__all__ = [*__entities__, *__models__]
