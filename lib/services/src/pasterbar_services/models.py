# region Imports

from pathlib import Path
from typing import Any, Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pasterbar_core.constants import ClipboardType

# endregion
# region Pydantic Models


class ClipboardPayload(BaseModel):
    """
    Snapshot of what the system clipboard holds at sampling time.
    Attributes:
        file_paths (list[Path]): File-system references, in clipboard order.
        images (list[Image.Image]): Rendered images (pixel data, no backing file).
        text (Optional[str]): The clipboard's string representation.
    """

    file_paths: list[Path] = Field(
        default_factory=list, description="File-system references on the clipboard"
    )
    images: list[Image.Image] = Field(
        default_factory=list, description="Image objects on the clipboard"
    )
    text: Optional[str] = Field(
        None, description="String representation of the clipboard"
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("file_paths", mode="before")
    def validate_paths(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [Path(p) for p in v if p not in (None, "")]
        return v

    @property
    def is_empty(self) -> bool:
        return not (self.file_paths or self.images or self.text)


class Candidate(BaseModel):
    """
    A classified (content, type) pair, not yet deduplicated or stored.
    Attributes:
        content (str): Literal text, or an absolute path for image/file candidates.
        type (ClipboardType): The classified type.
    """

    content: str = Field(..., min_length=1, description="Content to store")
    type: ClipboardType = Field(..., description="Classified clipboard type")

    model_config = ConfigDict(frozen=True)


# endregion
__all__ = ["Candidate", "ClipboardPayload"]
