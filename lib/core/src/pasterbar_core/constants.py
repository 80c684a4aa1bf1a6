# region Docstring
"""
pasterbar_core.constants
Shared constants and enumerations for clipboard classification and storage.
Overview:
- Defines the closed set of clipboard entry types.
- Defines the file extensions recognised as images when the clipboard holds
    file references.
- Fixes the on-disk names used under the per-user data directory.
Contents:
- Enumerations:
    - ClipboardType: text, image, file. Inherits from str so values compare
        and persist as plain strings.
- Constants:
    - IMAGE_EXTENSIONS: Lowercase extensions (no dot) classified as images.
    - MATERIALIZED_IMAGE_SUFFIX: Extension given to images written from raw pixel data.
    - MATERIALIZED_IMAGE_FORMAT: Pillow format name for materialized images.
    - DATABASE_FILENAME: History database file name.
    - IMAGE_DIRECTORY_NAME: Managed image directory name.
    - TABLE_NAME: History table name.
"""
# endregion
# region Imports
import enum
from typing import Tuple

# endregion
# region Enumerations


class ClipboardType(str, enum.Enum):
    """Enumeration of clipboard entry types."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


# endregion
# region Constants
IMAGE_EXTENSIONS: Tuple[str, ...] = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "tiff",
    "bmp",
    "heic",
)
"""Tuple[str, ...]: Extensions classified as images (compared case-insensitively)."""

MATERIALIZED_IMAGE_SUFFIX = ".png"
MATERIALIZED_IMAGE_FORMAT = "PNG"

DATABASE_FILENAME = "clipboard_data.db"
IMAGE_DIRECTORY_NAME = "copy_image"
TABLE_NAME = "clipboard"
# endregion


__all__ = [
    "ClipboardType",
    "DATABASE_FILENAME",
    "IMAGE_DIRECTORY_NAME",
    "IMAGE_EXTENSIONS",
    "MATERIALIZED_IMAGE_FORMAT",
    "MATERIALIZED_IMAGE_SUFFIX",
    "TABLE_NAME",
]
