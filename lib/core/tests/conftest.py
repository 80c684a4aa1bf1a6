import os
import tempfile

# Point the data root at a throwaway directory before pasterbar_core resolves it.
os.environ.setdefault("PASTERBAR_HOME", tempfile.mkdtemp(prefix="pasterbar-test-"))
os.environ.setdefault("PASTERBAR_ENV", "test")

import pytest  # noqa: E402

from pasterbar_core.config import HistoryStoreSettings  # noqa: E402
from pasterbar_core.store import HistoryStore  # noqa: E402


@pytest.fixture(scope="function")
def store_settings(tmp_path) -> HistoryStoreSettings:
    """History database settings pointing at a per-test SQLite file."""
    return HistoryStoreSettings(database_path=tmp_path / "data" / "clipboard_data.db")


@pytest.fixture(scope="function")
def store(store_settings):
    """An open HistoryStore, closed after the test."""
    history_store = HistoryStore(store_settings)
    try:
        yield history_store
    finally:
        history_store.close()


@pytest.fixture
def populated_store(store):
    """A store holding five entries of mixed types."""
    store.insert("hello", "text")
    store.insert("/tmp/a.png", "image")
    store.insert("/tmp/a.txt", "file")
    store.insert("world", "text")
    store.insert("/tmp/b.heic", "image")
    return store
