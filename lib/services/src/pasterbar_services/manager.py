# region Docstring
"""
pasterbar_services.manager
Facade wiring the clipboard watcher together for the presentation layer.
Overview:
- Builds the store, classifier, dedup gate, change detector, and history feed
    around one clipboard backend.
- Exposes the read/clear API, snapshot subscription, and write-back of entries
    onto the clipboard.
Contents:
- Classes:
    - ClipboardManager:
        - start() / stop(), also usable as a context manager
        - get_history() -> list[ClipboardHistory]     newest first
        - clear_all() -> bool
        - snapshot / subscribe(listener) / unsubscribe(listener)
        - copy_to_clipboard(entry) -> bool
Design Notes:
- None of these methods raise on storage or clipboard failures; failures are
    logged and surface as stale or missing entries, or a False return.
- Copying an entry back is not recorded: the write happens with detector ticks held
    off, and the detector then adopts the resulting clipboard state. Without this an
    image entry would be materialized again under a new file name and stored twice.
    Another process watching the same clipboard does still record it.
"""
# endregion
# region Imports
from logging import Logger
from pathlib import Path
from typing import Optional

from pasterbar_core.config import (
    ClipboardWatcherSettings,
    HistoryStoreSettings,
    get_settings,
)
from pasterbar_core.constants import ClipboardType
from pasterbar_core.logger import get_logger
from pasterbar_core.models import ClipboardHistory
from pasterbar_core.store import HistoryStore

from .classifier import ContentClassifier, ImageMaterializer
from .clipboard import ClipboardBackend, SystemClipboard
from .dedup import DedupChecker
from .detector import ChangeDetector
from .feed import HistoryFeed, Snapshot, SnapshotListener

# endregion
# region ClipboardManager


class ClipboardManager:
    """
    Clipboard history watcher: detection, classification, dedup, storage, and feed.
    """

    def __init__(
        self,
        clipboard: Optional[ClipboardBackend] = None,
        store: Optional[HistoryStore] = None,
        settings: Optional[ClipboardWatcherSettings] = None,
        store_settings: Optional[HistoryStoreSettings] = None,
        logger: Optional[Logger] = None,
    ):
        self.logger = logger or get_logger()
        self.settings = settings or get_settings(ClipboardWatcherSettings)
        self.clipboard = clipboard or SystemClipboard(self.logger)
        self.store = store or HistoryStore(store_settings, self.logger)
        self.materializer = ImageMaterializer(self.settings.image_directory, self.logger)
        self.classifier = ContentClassifier(self.settings, self.materializer, self.logger)
        self.dedup = DedupChecker(self.store, self.logger)
        self.detector = ChangeDetector(
            self.clipboard,
            self.classifier,
            self.dedup,
            self.store,
            self.settings,
            self.logger,
        )
        self.feed = HistoryFeed(self.store, self.settings, self.logger)

    # region Lifecycle
    def start(self) -> None:
        self.materializer.ensure_directory()
        if not self.store.available:
            self.logger.error("Clipboard history will not be recorded")
        self.feed.start()
        self.detector.start()
        self.logger.info(
            f"Watching clipboard every {self.settings.poll_interval}s "
            f"(refresh every {self.settings.refresh_interval}s)"
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        self.detector.stop(timeout)
        self.feed.stop(timeout)
        self.store.close()
        self.logger.info("Stopped watching clipboard")

    def __enter__(self) -> "ClipboardManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # endregion
    # region Read API
    def get_history(self) -> list[ClipboardHistory]:
        return self.store.query_all()

    def clear_all(self) -> bool:
        return self.store.clear_all()

    @property
    def snapshot(self) -> Snapshot:
        return self.feed.snapshot

    def subscribe(self, listener: SnapshotListener) -> None:
        self.feed.subscribe(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        self.feed.unsubscribe(listener)

    # endregion
    # region Write-back
    def copy_to_clipboard(self, entry: ClipboardHistory) -> bool:
        """
        Place an entry back onto the clipboard using the representation of its type.

        Args:
            entry (ClipboardHistory): The entry to copy.

        Returns:
            bool: True if the clipboard was written.
        """
        with self.detector.suppressed():
            match entry.type:
                case ClipboardType.TEXT:
                    written = self.clipboard.write_text(entry.content)
                case ClipboardType.IMAGE:
                    written = self.clipboard.write_image(Path(entry.content))
                case ClipboardType.FILE:
                    written = self.clipboard.write_file(Path(entry.content))
        if not written:
            self.logger.warning(f"Failed to copy entry {entry.id} to the clipboard")
        return written

    # endregion


# endregion
__all__ = ["ClipboardManager"]
