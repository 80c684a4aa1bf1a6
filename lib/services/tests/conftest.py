import os
import tempfile

# Point the data root at a throwaway directory before pasterbar_core resolves it.
os.environ.setdefault("PASTERBAR_HOME", tempfile.mkdtemp(prefix="pasterbar-test-"))
os.environ.setdefault("PASTERBAR_ENV", "test")

import pytest  # noqa: E402
from PIL import Image  # noqa: E402

from pasterbar_core.config import ClipboardWatcherSettings, HistoryStoreSettings  # noqa: E402
from pasterbar_core.store import HistoryStore  # noqa: E402
from pasterbar_services.classifier import ContentClassifier, ImageMaterializer  # noqa: E402
from pasterbar_services.clipboard import MemoryClipboard  # noqa: E402
from pasterbar_services.dedup import DedupChecker  # noqa: E402
from pasterbar_services.detector import ChangeDetector  # noqa: E402
from pasterbar_services.manager import ClipboardManager  # noqa: E402


@pytest.fixture
def watcher_settings(tmp_path) -> ClipboardWatcherSettings:
    """Fast intervals and a per-test managed image directory."""
    return ClipboardWatcherSettings(
        poll_interval=0.05,
        refresh_interval=0.05,
        image_directory=tmp_path / "copy_image",
    )


@pytest.fixture
def store(tmp_path):
    history_store = HistoryStore(
        HistoryStoreSettings(database_path=tmp_path / "clipboard_data.db")
    )
    try:
        yield history_store
    finally:
        history_store.close()


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def classifier(watcher_settings) -> ContentClassifier:
    return ContentClassifier(
        watcher_settings, ImageMaterializer(watcher_settings.image_directory)
    )


@pytest.fixture
def detector(clipboard, classifier, store, watcher_settings) -> ChangeDetector:
    """A primed detector: whatever is on the clipboard now is not recorded."""
    change_detector = ChangeDetector(
        clipboard, classifier, DedupChecker(store), store, watcher_settings
    )
    change_detector.prime()
    yield change_detector
    change_detector.stop(timeout=2)


@pytest.fixture
def manager(clipboard, store, watcher_settings):
    clipboard_manager = ClipboardManager(
        clipboard=clipboard, store=store, settings=watcher_settings
    )
    yield clipboard_manager
    clipboard_manager.stop(timeout=2)


@pytest.fixture
def red_square() -> Image.Image:
    return Image.new("RGB", (8, 8), color=(255, 0, 0))
