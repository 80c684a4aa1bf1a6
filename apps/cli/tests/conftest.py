import os
import tempfile

# Point the data root at a throwaway directory before pasterbar_core resolves it.
os.environ.setdefault("PASTERBAR_HOME", tempfile.mkdtemp(prefix="pasterbar-test-"))
os.environ.setdefault("PASTERBAR_ENV", "test")

import pytest  # noqa: E402
from typer.testing import CliRunner  # noqa: E402

from pasterbar_core.config import HistoryStoreSettings, get_settings  # noqa: E402
from pasterbar_core.store import HistoryStore  # noqa: E402
from pasterbar_services.clipboard import MemoryClipboard  # noqa: E402

import pasterbar_cli.main as cli_main  # noqa: E402


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def database_path(tmp_path):
    return tmp_path / "clipboard_data.db"


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path, database_path, clipboard):
    """Per-test data paths, an in-memory clipboard, and no logging reconfiguration."""
    monkeypatch.setenv("PASTERBAR_DATABASE_PATH", str(database_path))
    monkeypatch.setenv("PASTERBAR_IMAGE_DIRECTORY", str(tmp_path / "copy_image"))
    monkeypatch.setenv("PASTERBAR_LOG_FILE", str(tmp_path / "logs" / "pasterbar.jsonl"))
    monkeypatch.setenv("PASTERBAR_POLL_INTERVAL", "0.05")
    monkeypatch.setenv("PASTERBAR_REFRESH_INTERVAL", "0.05")
    monkeypatch.setattr(cli_main, "SystemClipboard", lambda *args, **kwargs: clipboard)
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def seeded(database_path):
    """Three entries on disk: text, image, file (ids 1, 2, 3)."""
    store = HistoryStore(HistoryStoreSettings(database_path=database_path))
    try:
        store.insert("hello clipboard", "text")
        store.insert("/tmp/shots/capture.png", "image")
        store.insert("/tmp/docs/report.txt", "file")
    finally:
        store.close()
    return database_path
