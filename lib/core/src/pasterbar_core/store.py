# region Docstring
"""
pasterbar_core.store
Durable, ordered, queryable clipboard history backed by SQLite through SQLAlchemy.
Overview:
- Opens (and if necessary creates) the history database and schema lazily on first use.
- Serializes every operation behind a single lock; the detector and feed tasks share
    one store instance.
- Never raises to callers. Storage failures are logged and reported through neutral
    return values (None, empty, False).
Contents:
- Classes:
    - HistoryStore:
        - insert(content, type) -> Optional[int]
        - query_all() -> list[ClipboardHistory]          newest first
        - load_snapshot() -> Optional[tuple[ClipboardHistory, ...]]
              like query_all, but None when the read failed
        - exists_with_content(content) -> bool
        - get(entry_id) -> Optional[ClipboardHistory]
        - count() -> int
        - clear_all() -> bool
        - subscribe(listener) / unsubscribe(listener)
              listeners are called after each successful insert or clear
        - close()
Design Notes:
- If the database cannot be opened or its schema created, the store is degraded:
    the failure is logged once and every later operation is a no-op.
- `clear_all` removes rows only. Files referenced by image entries belong to the
    managed image directory and are left on disk.
"""
# endregion
# region Imports
import threading
from logging import Logger
from typing import Callable, Optional, Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from pasterbar_core.config import HistoryStoreSettings, get_settings
from pasterbar_core.constants import ClipboardType
from pasterbar_core.database import DatabaseSessionGenerator
from pasterbar_core.logger import get_logger
from pasterbar_core.models.history import ClipboardHistory, ClipboardHistoryEntity

# endregion
# region HistoryStore

StoreListener = Callable[[], None]


class HistoryStore:
    """
    Append-only clipboard history table with a full-clear as the only deletion path.
    """

    def __init__(
        self,
        settings: Optional[HistoryStoreSettings] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Args:
            settings (HistoryStoreSettings): Database location. Defaults to the cached settings.
            logger (Logger): Parent logger; the store logs under a "HistoryStore" child.
        """
        self.settings = settings or get_settings(HistoryStoreSettings)
        self.logger = (logger or get_logger()).getChild("HistoryStore")
        self._lock = threading.RLock()
        self._db: Optional[DatabaseSessionGenerator] = None
        self._degraded = False
        self._closed = False
        self._listeners: list[StoreListener] = []

    # region Lifecycle
    def _ensure_open(self) -> Optional[DatabaseSessionGenerator]:
        if self._db is not None:
            return self._db
        if self._degraded or self._closed:
            return None
        db = None
        try:
            db = DatabaseSessionGenerator(self.settings)
            db.init_db()
        except (OSError, SQLAlchemyError) as e:
            self.logger.error(
                f"History store unavailable at {self.settings.database_path}: {e}"
            )
            if db is not None:
                db.dispose()
            self._degraded = True
            return None
        self.logger.debug(f"Opened history store at {self.settings.database_path}")
        self._db = db
        return db

    @property
    def available(self) -> bool:
        """True when the backing database is open (opening it if needed)."""
        with self._lock:
            return self._ensure_open() is not None

    @property
    def degraded(self) -> bool:
        return self._degraded

    def close(self) -> None:
        """Release the database; subsequent operations are no-ops."""
        with self._lock:
            self._closed = True
            if self._db is not None:
                self._db.dispose()
                self._db = None
            self._listeners.clear()

    # endregion
    # region Listeners
    def subscribe(self, listener: StoreListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                self.logger.exception("History store listener failed")

    # endregion
    # region Writes
    def insert(
        self, content: str, type: Union[ClipboardType, str]
    ) -> Optional[int]:
        """
        Append a new entry.

        Args:
            content (str): Non-empty text, or an absolute path for image/file entries.
            type (ClipboardType | str): The entry type.

        Returns:
            Optional[int]: The new entry id, or None if nothing was written.
        """
        if not content:
            self.logger.warning("Refusing to store empty clipboard content")
            return None
        try:
            entry_type = ClipboardType(type)
        except ValueError:
            self.logger.warning(f"Refusing to store unknown clipboard type {type!r}")
            return None

        with self._lock:
            db = self._ensure_open()
            if db is None:
                return None
            with db.get_session() as session:
                try:
                    entity = ClipboardHistoryEntity(
                        content=content, type=entry_type.value
                    )
                    session.add(entity)
                    session.commit()
                    entry_id = entity.id
                except SQLAlchemyError as e:
                    session.rollback()
                    self.logger.error(f"Failed to store {entry_type.value} entry: {e}")
                    return None

        self.logger.info(f"Stored {entry_type.value} entry {entry_id}")
        self._notify()
        return entry_id

    def clear_all(self) -> bool:
        """Remove every entry. Returns False if the clear failed or the store is degraded."""
        with self._lock:
            db = self._ensure_open()
            if db is None:
                return False
            with db.get_session() as session:
                try:
                    result = session.execute(delete(ClipboardHistoryEntity))
                    session.commit()
                except SQLAlchemyError as e:
                    session.rollback()
                    self.logger.error(f"Failed to clear clipboard history: {e}")
                    return False

        self.logger.info(f"Cleared clipboard history ({result.rowcount} entries)")
        self._notify()
        return True

    # endregion
    # region Reads
    def load_snapshot(self) -> Optional[tuple[ClipboardHistory, ...]]:
        """
        Load every entry ordered by id descending.

        Returns:
            Optional[tuple[ClipboardHistory, ...]]: The entries, or None when the read
            failed or the store is unavailable.
        """
        with self._lock:
            db = self._ensure_open()
            if db is None:
                return None
            with db.get_session() as session:
                try:
                    rows = session.scalars(
                        select(ClipboardHistoryEntity).order_by(
                            ClipboardHistoryEntity.id.desc()
                        )
                    ).all()
                    return tuple(row.model for row in rows)
                except SQLAlchemyError as e:
                    self.logger.error(f"Failed to load clipboard history: {e}")
                    return None

    def query_all(self) -> list[ClipboardHistory]:
        """All entries, newest first. Empty on failure."""
        return list(self.load_snapshot() or ())

    def exists_with_content(self, content: str) -> bool:
        """True if any entry in the full history has exactly this content."""
        with self._lock:
            db = self._ensure_open()
            if db is None:
                return False
            with db.get_session() as session:
                try:
                    found = session.scalar(
                        select(ClipboardHistoryEntity.id)
                        .where(ClipboardHistoryEntity.content == content)
                        .limit(1)
                    )
                except SQLAlchemyError as e:
                    self.logger.error(f"Failed to look up clipboard content: {e}")
                    return False
        return found is not None

    def get(self, entry_id: int) -> Optional[ClipboardHistory]:
        with self._lock:
            db = self._ensure_open()
            if db is None:
                return None
            with db.get_session() as session:
                try:
                    entity = session.get(ClipboardHistoryEntity, entry_id)
                    return entity.model if entity is not None else None
                except SQLAlchemyError as e:
                    self.logger.error(f"Failed to load entry {entry_id}: {e}")
                    return None

    def count(self) -> int:
        with self._lock:
            db = self._ensure_open()
            if db is None:
                return 0
            with db.get_session() as session:
                try:
                    return session.scalar(
                        select(func.count()).select_from(ClipboardHistoryEntity)
                    ) or 0
                except SQLAlchemyError as e:
                    self.logger.error(f"Failed to count clipboard history: {e}")
                    return 0

    # endregion


# endregion
__all__ = ["HistoryStore", "StoreListener"]
