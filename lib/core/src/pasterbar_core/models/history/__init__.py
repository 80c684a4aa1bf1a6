"""
pasterbar_core.models.history
Package initialization for clipboard history persistence and domain models.
Contents:
- Entity Models:
    - ClipboardHistoryEntity: SQLAlchemy row in the `clipboard` table.
- Domain Models:
    - ClipboardHistory: Immutable Pydantic mirror handed to observers.
"""

from .clipboard_history import ClipboardHistory, ClipboardHistoryEntity  # noqa: F401


__entities__ = ["ClipboardHistoryEntity"]
__models__ = ["ClipboardHistory"]
__all__ = [*__entities__, *__models__]
