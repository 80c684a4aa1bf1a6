# region Docstring
"""
pasterbar_core.models.history.clipboard_history
Persistence and domain models for clipboard history entries.
Overview:
- Provides the SQLAlchemy entity persisting one row per distinct clipboard content.
- Provides an immutable Pydantic model mirroring the persisted entity, handed to
    observers and the presentation layer as part of a history snapshot.
Contents:
- SQLAlchemy entities:
    - ClipboardHistoryEntity:
        Table `clipboard` with `id` (AUTOINCREMENT, never reused), `content`
        (literal text, or an absolute path for image/file entries), `type`
        (text|image|file) and `created_at` (set by the database at insert time).
        The .model property converts to a ClipboardHistory.
- Pydantic models:
    - ClipboardHistory:
        Frozen domain model for a single entry. Provides `display_name` and `path`
        with exhaustive handling of ClipboardType.
Design notes:
- `content` is indexed because every detected change runs an existence lookup
    against the full history.
- Identity is `id`; deduplication compares `content` only.
- For image and file entries `content` is a path string. The referenced file is
    not validated on read and is never deleted by the store.
"""
# endregion
# region Imports
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from pasterbar_core.constants import TABLE_NAME, ClipboardType
from pasterbar_core.database import Base


# endregion
# region SQLAlchemy Model
class ClipboardHistoryEntity(Base):
    """
    Model representing clipboard history entries.
    Attributes:
        id (int): Primary key, strictly increasing, never reused.
        content (str): Literal text, or an absolute path for image/file entries.
        type (str): One of "text", "image", "file".
        created_at (datetime): Timestamp assigned by the database at insert time.
    """

    __tablename__ = TABLE_NAME
    __table_args__ = (
        CheckConstraint("length(content) > 0", name="ck_clipboard_content_not_empty"),
        CheckConstraint(
            "type IN ('text', 'image', 'file')", name="ck_clipboard_type_valid"
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )

    def __repr__(self) -> str:
        return f"<ClipboardHistory(id={self.id}, type='{self.type}', created_at={self.created_at})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClipboardHistoryEntity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def model(self) -> "ClipboardHistory":
        return ClipboardHistory.model_validate(self)


# endregion
# region Pydantic Model
class ClipboardHistory(BaseModel):
    id: int = Field(..., description="The unique ID of the clipboard history entry")
    content: str = Field(
        ...,
        min_length=1,
        description="Literal text, or the absolute path of an image/file entry",
    )
    type: ClipboardType = Field(..., description="The type of content")
    created_at: Optional[datetime] = Field(
        None, description="Timestamp assigned by the store at insert time"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "content": "Sample clipboard text",
                    "type": "text",
                    "created_at": "2024-12-26T12:00:00",
                },
                {
                    "id": 2,
                    "content": "/Users/me/paster_bar/copy_image/0b6f.png",
                    "type": "image",
                    "created_at": "2024-12-26T12:00:05",
                },
            ]
        },
        from_attributes=True,
        frozen=True,
    )

    @property
    def path(self) -> Optional[Path]:
        """Filesystem path for image/file entries, None for text."""
        match self.type:
            case ClipboardType.TEXT:
                return None
            case ClipboardType.IMAGE | ClipboardType.FILE:
                return Path(self.content)

    @property
    def display_name(self) -> str:
        """Label for list views: the text itself, or the file name of a path."""
        match self.type:
            case ClipboardType.TEXT:
                return self.content
            case ClipboardType.IMAGE | ClipboardType.FILE:
                return Path(self.content).name or self.content


# endregion

__all__ = ["ClipboardHistoryEntity", "ClipboardHistory"]
