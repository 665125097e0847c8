"""Simulated device pairing state machine."""

import logging
import random
from concurrent.futures import Future
from threading import RLock
from typing import Protocol, runtime_checkable

from focuscube.models import ConnectionStatus

from .scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from .store import ConfigStore

logger = logging.getLogger(__name__)

NOTIFICATION_MESSAGES: dict[ConnectionStatus, tuple[str, str]] = {
    ConnectionStatus.CONNECTED: ("Smart Cube Connected", "Your settings have been synced."),
    ConnectionStatus.FAILED: ("Connection Failed", "Please ensure your device is in range."),
}


@runtime_checkable
class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float:
        ...


class ConnectionController:
    """
    Drives the idle -> connecting -> connected/failed lifecycle.

    This is a timed simulation, not a transport: each attempt waits
    `latency` seconds, then a single random draw decides the outcome
    (`failure_probability` chance of failure). Either outcome shows the
    notification popup, which hides itself after `notification_timeout`
    seconds.

    Transitions:
        - connect(): idle/failed -> connecting. No-op while connecting
          (the pending future is returned) or when already connected.
        - latency elapsed: connecting -> connected | failed, popup shown.
        - disconnect(): any -> idle, popup hidden. Always available.
        - dismiss_notification() or timeout: popup hidden.

    Stale Callbacks:
        Each pending timer is tagged with a generation token. Any competing
        transition bumps the token and cancels the timer, and a callback
        whose token no longer matches does nothing.

    Threading:
        Timer callbacks arrive on the scheduler's thread. All transitions
        run under an RLock, so they are serialized and published to the
        store in order; the lock is re-entrant so store observers may call
        back into the controller.
    """

    def __init__(
        self,
        store: ConfigStore,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
        latency: float = 2.0,
        failure_probability: float = 0.1,
        notification_timeout: float = 3.0,
    ):
        """
        Args:
            store: Store that publishes connection status
            scheduler: Delayed-callback source (defaults to ThreadingScheduler)
            rng: Random source for the outcome draw (defaults to random.Random())
            latency: Seconds between connect() and the outcome
            failure_probability: Chance in [0, 1] that an attempt fails
            notification_timeout: Seconds before the popup auto-dismisses
        """
        if not 0 <= failure_probability <= 1:
            raise ValueError(f"failure_probability must be in [0, 1], got {failure_probability}")

        self._store = store
        self._scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._rng = rng if rng is not None else random.Random()
        self._latency = latency
        self._failure_probability = failure_probability
        self._notification_timeout = notification_timeout

        self._lock = RLock()
        self._attempt_token = 0
        self._attempt_call: ScheduledCall | None = None
        self._pending: Future[ConnectionStatus] | None = None
        self._dismiss_token = 0
        self._dismiss_call: ScheduledCall | None = None

    @property
    def status(self) -> ConnectionStatus:
        return self._store.connection_status

    @property
    def is_connecting(self) -> bool:
        return self._store.connection_status is ConnectionStatus.CONNECTING

    # =================================================================
    # Commands
    # =================================================================

    def connect(self) -> Future[ConnectionStatus]:
        """
        Start a pairing attempt and return immediately.

        Returns:
            Future resolved with CONNECTED or FAILED when the attempt
            completes, or IDLE if disconnect() is called first. While an
            attempt is in flight the same future is returned again.
        """
        with self._lock:
            status = self._store.connection_status

            if status is ConnectionStatus.CONNECTING and self._pending is not None:
                logger.debug("connect() ignored: attempt already in flight")
                return self._pending

            if status is ConnectionStatus.CONNECTED:
                logger.debug("connect() ignored: already connected")
                done: Future[ConnectionStatus] = Future()
                done.set_result(status)
                return done

            # A new attempt supersedes the previous outcome's popup
            self._cancel_dismiss_locked()

            self._attempt_token += 1
            token = self._attempt_token
            future: Future[ConnectionStatus] = Future()
            self._pending = future

            self._store.apply_connection_state(ConnectionStatus.CONNECTING, show_notification=False)
            self._attempt_call = self._scheduler.call_later(
                self._latency, lambda: self._complete_attempt(token)
            )

        logger.info("Connecting to device")
        return future

    def disconnect(self) -> None:
        """Return to idle and hide the popup, cancelling anything pending."""
        with self._lock:
            pending = self._cancel_attempt_locked()
            self._cancel_dismiss_locked()
            self._store.apply_connection_state(ConnectionStatus.IDLE, show_notification=False)

        if pending is not None and not pending.done():
            pending.set_result(ConnectionStatus.IDLE)
        logger.info("Disconnected from device")

    def dismiss_notification(self) -> None:
        """Hide the popup now and cancel its auto-dismiss."""
        with self._lock:
            self._cancel_dismiss_locked()
            self._store.apply_connection_state(show_notification=False)

    def notification_message(self) -> tuple[str, str] | None:
        """(title, body) for the popup, or None when it isn't showing."""
        if not self._store.show_notification:
            return None
        return NOTIFICATION_MESSAGES.get(self._store.connection_status)

    def close(self) -> None:
        """
        Cancel pending timers on shutdown.

        An attempt still in flight is abandoned: its future is cancelled and
        the store drops back to idle. The popup is hidden along with its
        auto-dismiss timer.
        """
        with self._lock:
            pending = self._cancel_attempt_locked()
            self._cancel_dismiss_locked()
            abandoned = self._store.connection_status is ConnectionStatus.CONNECTING
            self._store.apply_connection_state(
                status=ConnectionStatus.IDLE if abandoned else None,
                show_notification=False,
            )

        if pending is not None and not pending.done():
            pending.cancel()
        if isinstance(self._scheduler, ThreadingScheduler):
            self._scheduler.cancel_all()

    # =================================================================
    # Timer Callbacks
    # =================================================================

    def _complete_attempt(self, token: int) -> None:
        with self._lock:
            if token != self._attempt_token:
                logger.debug(f"Ignoring stale connection attempt {token}")
                return
            if self._store.connection_status is not ConnectionStatus.CONNECTING:
                logger.debug(f"Ignoring attempt {token}: no longer connecting")
                return

            self._attempt_call = None
            failed = self._rng.random() < self._failure_probability
            outcome = ConnectionStatus.FAILED if failed else ConnectionStatus.CONNECTED

            self._store.apply_connection_state(outcome, show_notification=True)
            self._schedule_dismiss_locked()

            future, self._pending = self._pending, None

        if failed:
            logger.warning("Device connection failed")
        else:
            logger.info("Device connected")

        if future is not None and not future.done():
            future.set_result(outcome)

    def _auto_dismiss(self, token: int) -> None:
        with self._lock:
            if token != self._dismiss_token:
                logger.debug(f"Ignoring stale auto-dismiss {token}")
                return
            self._dismiss_call = None
            self._store.apply_connection_state(show_notification=False)

    # =================================================================
    # Timer Bookkeeping (call with _lock held)
    # =================================================================

    def _schedule_dismiss_locked(self) -> None:
        self._cancel_dismiss_locked()
        token = self._dismiss_token
        self._dismiss_call = self._scheduler.call_later(
            self._notification_timeout, lambda: self._auto_dismiss(token)
        )

    def _cancel_dismiss_locked(self) -> None:
        self._dismiss_token += 1
        if self._dismiss_call is not None:
            self._dismiss_call.cancel()
            self._dismiss_call = None

    def _cancel_attempt_locked(self) -> Future[ConnectionStatus] | None:
        self._attempt_token += 1
        if self._attempt_call is not None:
            self._attempt_call.cancel()
            self._attempt_call = None
        pending, self._pending = self._pending, None
        return pending
