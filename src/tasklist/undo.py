"""Undo window timer.

At most one deferred callback is outstanding. Starting the timer again
cancels the previous callback and schedules a fresh one.
"""

import threading
from typing import Callable, Protocol

from tasklist.logging import Loggers

logger = Loggers.store()

DEFAULT_UNDO_WINDOW_SECONDS = 5.0


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle: ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class UndoTimer:
    """Single cancel-and-replace deferred callback.

    Example:
        >>> timer = UndoTimer(ThreadingScheduler(), delay=5.0)
        >>> timer.start(lambda: print("expired"))
        >>> timer.start(lambda: print("expired again"))  # first one cancelled
        >>> timer.cancel()
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        delay: float = DEFAULT_UNDO_WINDOW_SECONDS,
    ) -> None:
        self._scheduler = scheduler or ThreadingScheduler()
        self.delay = delay
        self._handle: ScheduledHandle | None = None
        self._token: object | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self, callback: Callable[[], None]) -> None:
        """Cancel any pending callback and schedule ``callback`` after the delay."""
        with self._lock:
            self._cancel_locked()
            # A superseded callback that fires anyway must do nothing.
            token = object()
            self._token = token

            def fire() -> None:
                with self._lock:
                    if self._token is not token:
                        return
                    self._handle = None
                    self._token = None
                callback()

            self._handle = self._scheduler.schedule(self.delay, fire)
        logger.debug("undo_timer_started", delay=self.delay)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("undo_timer_cancelled")
        self._handle = None
        self._token = None
