# region Docstring
"""
pasterbar_services.classifier
Turns a clipboard payload into storable (content, type) candidates.
Overview:
- Applies a fixed precedence: file references, then rendered images, then text.
    The first branch with anything present wins and the others are skipped.
- Materializes rendered images as PNG files under the managed image directory.
Contents:
- Classes:
    - ImageMaterializer:
        Encodes a Pillow image to PNG and writes it under a freshly generated
        unique filename. Returns None when encoding or writing fails.
    - ContentClassifier:
        `classify(payload)` yields Candidate objects lazily, so each candidate can
        be deduplicated and stored before the next one is produced.
Design Notes:
- File references are classified by extension only (case-insensitive); the file
    itself is never opened.
- A failed materialization drops that image silently (WARNING log) and never
    reaches deduplication or storage.
"""
# endregion
# region Imports
import uuid
from io import BytesIO
from logging import Logger
from pathlib import Path
from typing import Iterator, Optional

from PIL import Image

from pasterbar_core.config import ClipboardWatcherSettings, get_settings
from pasterbar_core.constants import (
    MATERIALIZED_IMAGE_FORMAT,
    MATERIALIZED_IMAGE_SUFFIX,
    ClipboardType,
)
from pasterbar_core.logger import get_logger

from .models import Candidate, ClipboardPayload

# endregion
# region ImageMaterializer


class ImageMaterializer:
    """
    Writes clipboard images into the managed image directory.
    """

    def __init__(self, directory: Path, logger: Optional[Logger] = None):
        self.directory = Path(directory)
        self.logger = (logger or get_logger()).getChild("ImageMaterializer")

    def ensure_directory(self) -> bool:
        """Create the managed directory if absent. Returns False if that failed."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Cannot create image directory {self.directory}: {e}")
            return False
        return True

    def new_path(self) -> Path:
        return (self.directory / f"{uuid.uuid4()}{MATERIALIZED_IMAGE_SUFFIX}").absolute()

    def _discard(self, path: Path) -> None:
        """Remove a partially written file; the directory itself may be unusable."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.debug(f"Could not remove partial image {path}: {e}")

    def materialize(self, image: Image.Image) -> Optional[Path]:
        """
        Encode and write an image.

        Args:
            image (Image.Image): Pixel data taken from the clipboard.

        Returns:
            Optional[Path]: Absolute path of the written file, or None on failure.
        """
        buffer = BytesIO()
        try:
            image.save(buffer, format=MATERIALIZED_IMAGE_FORMAT)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Failed to encode clipboard image: {e}")
            return None

        path = self.new_path()
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(buffer.getvalue())
        except OSError as e:
            self.logger.warning(f"Failed to write clipboard image to {path}: {e}")
            self._discard(path)
            return None
        self.logger.debug(f"Materialized clipboard image at {path}")
        return path


# endregion
# region ContentClassifier


class ContentClassifier:
    """
    Classifies clipboard payloads into text, image, and file candidates.
    """

    def __init__(
        self,
        settings: Optional[ClipboardWatcherSettings] = None,
        materializer: Optional[ImageMaterializer] = None,
        logger: Optional[Logger] = None,
    ):
        self.settings = settings or get_settings(ClipboardWatcherSettings)
        self.logger = (logger or get_logger()).getChild("ContentClassifier")
        self.materializer = materializer or ImageMaterializer(
            self.settings.image_directory, logger
        )
        self.image_extensions = frozenset(
            ext.lower().lstrip(".") for ext in self.settings.image_extensions
        )

    def is_image_path(self, path: Path) -> bool:
        return Path(path).suffix.lstrip(".").lower() in self.image_extensions

    def classify_file(self, path: Path) -> Candidate:
        path = Path(path).absolute()
        kind = ClipboardType.IMAGE if self.is_image_path(path) else ClipboardType.FILE
        return Candidate(content=str(path), type=kind)

    def classify(self, payload: ClipboardPayload) -> Iterator[Candidate]:
        """
        Yield candidates for the payload, in clipboard order.

        Args:
            payload (ClipboardPayload): The sampled clipboard contents.

        Yields:
            Candidate: One per file reference, one per successfully materialized
            image, or one for non-empty text.
        """
        if payload.file_paths:
            for path in payload.file_paths:
                yield self.classify_file(path)
            return

        if payload.images:
            for image in payload.images:
                saved = self.materializer.materialize(image)
                if saved is not None:
                    yield Candidate(content=str(saved), type=ClipboardType.IMAGE)
            return

        if payload.text:
            yield Candidate(content=payload.text, type=ClipboardType.TEXT)


# endregion
__all__ = ["ContentClassifier", "ImageMaterializer"]
