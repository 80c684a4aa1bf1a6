# region Docstring
"""
pasterbar_services.detector
Polling change detector for the system clipboard.
Overview:
- Samples the clipboard's change counter on a fixed period (1.5 s by default).
- When the counter differs from the last observed value, records the new value
    first and then runs classify -> dedup -> store synchronously within the tick.
Contents:
- Classes:
    - ChangeDetector:
        - prime(): adopt the current counter without processing, so whatever is on
            the clipboard at startup is not recorded.
        - tick() -> list[int]: one sampling step; returns the ids inserted.
        - process() -> list[int]: run the pipeline for the current payload.
        - suppressed(): context manager; clipboard writes made inside it are
            adopted as the current state rather than recorded.
        - start() / stop(): control the periodic task.
Design Notes:
- Changes that happen between two samples collapse into the state seen at sampling
    time.
- A tick whose pipeline drops a candidate does not retry it; the next attempt is the
    next distinct change.
"""
# endregion
# region Imports
from contextlib import contextmanager
from logging import Logger
from typing import Iterator, Optional

from pasterbar_core.config import ClipboardWatcherSettings, get_settings
from pasterbar_core.logger import get_logger
from pasterbar_core.store import HistoryStore

from .classifier import ContentClassifier
from .clipboard import ClipboardBackend
from .dedup import DedupChecker
from .scheduler import PeriodicTask

# endregion
# region ChangeDetector


class ChangeDetector:
    """
    Detects clipboard changes and stores each new distinct content once.
    """

    def __init__(
        self,
        clipboard: ClipboardBackend,
        classifier: ContentClassifier,
        dedup: DedupChecker,
        store: HistoryStore,
        settings: Optional[ClipboardWatcherSettings] = None,
        logger: Optional[Logger] = None,
    ):
        self.clipboard = clipboard
        self.classifier = classifier
        self.dedup = dedup
        self.store = store
        self.settings = settings or get_settings(ClipboardWatcherSettings)
        self.logger = (logger or get_logger()).getChild("ChangeDetector")
        self.last_change_count: Optional[int] = None
        self._task = PeriodicTask(
            "ChangeDetector", self.settings.poll_interval, self.tick, logger
        )

    @property
    def running(self) -> bool:
        return self._task.running

    def _read_change_count(self) -> Optional[int]:
        try:
            return self.clipboard.change_count()
        except Exception as e:
            self.logger.debug(f"Failed to read clipboard change counter: {e}")
            return None

    def prime(self) -> None:
        self.last_change_count = self._read_change_count()

    def tick(self) -> list[int]:
        count = self._read_change_count()
        if count is None or count == self.last_change_count:
            return []
        self.last_change_count = count
        return self.process()

    def process(self) -> list[int]:
        payload = self.clipboard.read_payload()
        inserted: list[int] = []
        for candidate in self.classifier.classify(payload):
            if not self.dedup.admit(candidate):
                continue
            entry_id = self.store.insert(candidate.content, candidate.type)
            if entry_id is not None:
                inserted.append(entry_id)
        return inserted

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """
        Adopt clipboard changes made inside the block instead of recording them.

        Ticks are held off while the block runs, so a scheduled tick cannot see the
        change first.
        """
        with self._task.held():
            try:
                yield
            finally:
                self.prime()

    def start(self) -> None:
        if self.last_change_count is None:
            self.prime()
        self._task.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._task.stop(timeout)


# endregion
__all__ = ["ChangeDetector"]
