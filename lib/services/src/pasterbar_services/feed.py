"""
pasterbar_services.feed

Publishes immutable history snapshots to registered listeners.

The feed reloads the full ordered history on a fixed period (1.0 s by default)
and immediately after every successful store write. Each reload replaces the
previous snapshot wholesale. A failed reload keeps the previous snapshot.
"""

import threading
from logging import Logger
from typing import Callable, Optional

from pasterbar_core.config import ClipboardWatcherSettings, get_settings
from pasterbar_core.logger import get_logger
from pasterbar_core.models import ClipboardHistory
from pasterbar_core.store import HistoryStore

from .scheduler import PeriodicTask

Snapshot = tuple[ClipboardHistory, ...]
SnapshotListener = Callable[[Snapshot], None]


class HistoryFeed:
    """Owns the last-known history snapshot and notifies listeners on replace."""

    def __init__(
        self,
        store: HistoryStore,
        settings: Optional[ClipboardWatcherSettings] = None,
        logger: Optional[Logger] = None,
    ):
        self.store = store
        self.settings = settings or get_settings(ClipboardWatcherSettings)
        self.logger = (logger or get_logger()).getChild("HistoryFeed")
        self._lock = threading.Lock()
        self._snapshot: Snapshot = ()
        self._failing = False
        self._listeners: list[SnapshotListener] = []
        self._task = PeriodicTask(
            "HistoryFeed", self.settings.refresh_interval, self.refresh, logger
        )

    @property
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    @property
    def running(self) -> bool:
        return self._task.running

    def subscribe(self, listener: SnapshotListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def refresh(self) -> bool:
        """Reload from the store and publish. False if the reload failed."""
        loaded = self.store.load_snapshot()
        if loaded is None:
            # A degraded store has already logged why it is unavailable.
            if not self._failing and not self.store.degraded:
                self.logger.warning("History reload failed; keeping previous snapshot")
            self._failing = True
            return False
        if self._failing:
            self.logger.info("History reload recovered")
            self._failing = False
        self._publish(loaded)
        return True

    def request_refresh(self) -> None:
        """
        Out-of-schedule refresh, serialized with the periodic reloads.

        Runs on the calling thread unless a reload is already in progress, in which
        case that reload is followed by another one. It never blocks, so listeners
        may write to the store.
        """
        self._task.trigger()

    def _publish(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                self.logger.exception("History listener failed")

    def start(self) -> None:
        self.store.subscribe(self.request_refresh)
        self.request_refresh()
        self._task.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.store.unsubscribe(self.request_refresh)
        self._task.stop(timeout)


__all__ = ["HistoryFeed", "Snapshot", "SnapshotListener"]
