"""Cancellable delayed callbacks.

The connection controller never sleeps; it asks a Scheduler to run a
callback later and keeps the returned handle so the callback can be
cancelled when a competing transition happens first.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ScheduledCall(Protocol):
    """Handle for a pending callback."""

    def cancel(self) -> None:
        """Prevent the callback from running (no-op if it already ran)."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs callbacks after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """
        Schedule callback to run once after delay seconds.

        Args:
            delay: Seconds to wait
            callback: Zero-argument callable

        Returns:
            Handle that can cancel the call
        """
        ...


class ThreadingScheduler:
    """
    Scheduler backed by daemon threading.Timer instances.

    Callbacks run on the timer's own thread. Exceptions raised by a callback
    are logged and do not kill the process.
    """

    def __init__(self, name: str = "focuscube-timer"):
        self._name = name
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> "_TimerCall":
        timer: threading.Timer

        def run() -> None:
            self._forget(timer)
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in scheduled callback {callback}: {e}", exc_info=True)

        timer = threading.Timer(delay, run)
        timer.daemon = True
        timer.name = self._name
        with self._lock:
            self._timers.add(timer)
        timer.start()
        return _TimerCall(self, timer)

    def _forget(self, timer: threading.Timer) -> None:
        with self._lock:
            self._timers.discard(timer)

    def cancel_all(self) -> None:
        """Cancel every pending timer (used on shutdown)."""
        with self._lock:
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            logger.debug(f"Cancelled {len(timers)} pending timer(s)")

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)


class _TimerCall:
    """ScheduledCall wrapping a threading.Timer."""

    def __init__(self, scheduler: ThreadingScheduler, timer: threading.Timer):
        self._scheduler = scheduler
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()
        self._scheduler._forget(self._timer)
