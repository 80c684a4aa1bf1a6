"""
pasterbar_services.scheduler

Periodic task primitive shared by the change detector and the history feed.

Each PeriodicTask owns one daemon thread that calls its handler every
`interval` seconds. Ticks of the same task never overlap: the scheduled loop,
`run_once()` and `trigger()` share a lock. Two different tasks run independently
of each other.

`trigger()` never waits for a tick in progress. It records the request, and
whichever thread holds the lock runs one more tick after its current one. This
lets a handler's own side effects (a listener writing to the store, say) request
another tick without deadlocking.
"""

import threading
from contextlib import contextmanager
from logging import Logger
from typing import Callable, Iterator, Optional

from pasterbar_core.logger import get_logger


class PeriodicTask:
    """Run `handler` every `interval` seconds on a dedicated thread."""

    def __init__(
        self,
        name: str,
        interval: float,
        handler: Callable[[], object],
        logger: Optional[Logger] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.handler = handler
        self.logger = (logger or get_logger()).getChild(name)
        self._tick_lock = threading.Lock()
        self._pending = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        self.logger.debug(f"Started with interval {self.interval}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel further ticks and wait for an in-flight tick to finish."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self.logger.debug("Stopped")

    def _call(self):
        try:
            return self.handler()
        except Exception:
            self.logger.exception(f"{self.name} tick failed")
            return None

    def run_once(self):
        """Run the handler now, serialized with the scheduled ticks."""
        with self._tick_lock:
            result = self._call()
        self._drain()
        return result

    def trigger(self) -> None:
        """Request a tick now without waiting on one that is already running."""
        self._pending.set()
        self._drain()

    def _drain(self) -> None:
        while self._pending.is_set() and self._tick_lock.acquire(blocking=False):
            try:
                self._pending.clear()
                self._call()
            finally:
                self._tick_lock.release()

    @contextmanager
    def held(self) -> Iterator[None]:
        """Keep ticks from running for the duration of the block."""
        with self._tick_lock:
            yield
        self._drain()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.run_once()


__all__ = ["PeriodicTask"]
