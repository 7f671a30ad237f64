"""Timer - a countdown that fires on_finish, built on a Stopwatch."""
from __future__ import annotations

import logging
import threading
from typing import Any

from tick_chrono.scheduler import ThreadingScheduler
from tick_chrono.stopwatch import Stopwatch
from tick_chrono.types import Hook, Scheduler, TimeSource, noop

logger = logging.getLogger(__name__)


class Timer:
    """Countdown of ``delay`` milliseconds over an owned Stopwatch.

    The Stopwatch tracks elapsed time. Its ``on_start`` hook re-arms the single
    pending callback for whatever time is left, and its ``on_stop`` hook
    cancels it, so ``on_finish`` runs at most once per countdown and never
    after a stop.

    The full-delay callback is armed at construction even when ``auto_start``
    is False. ``start()`` replaces it with one based on elapsed time.

    Args:
        delay: countdown length in milliseconds.
        auto_start: start the countdown immediately.
        callback: initial ``on_finish`` handler.
        clock: millisecond time source for the Stopwatch.
        scheduler: deferred-callback facility, defaults to ThreadingScheduler.
    """

    def __init__(
        self,
        delay: float,
        auto_start: bool = True,
        callback: Hook | None = None,
        *,
        clock: TimeSource | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._delay = delay
        self._scheduler: Scheduler = (
            scheduler if scheduler is not None else ThreadingScheduler()
        )
        self._lock = threading.RLock()
        self._pending: Any = None
        self._token = 0

        self.on_finish: Hook = noop

        self._stopwatch = Stopwatch(auto_start, clock=clock)
        self._stopwatch.on_stop = self._cancel_pending
        self._stopwatch.on_start = self._reschedule

        if callback is not None:
            self.on_finish = callback
        self._schedule(self._delay)

    @property
    def delay(self) -> float:
        return self._delay

    def start(self) -> bool:
        """Start the countdown. Returns False if already running."""
        with self._lock:
            return self._stopwatch.start()

    def stop(self) -> bool:
        """Pause the countdown. Returns False if not running."""
        with self._lock:
            return self._stopwatch.stop()

    def toggle(self) -> bool:
        with self._lock:
            return self._stopwatch.toggle()

    def reset(self) -> bool:
        """Restart the countdown at the full delay, keeping the running state.

        The callback is re-armed for the full delay whether or not the timer
        is running. Returns False if the timer was never started, otherwise
        whether it is running.
        """
        with self._lock:
            self._stopwatch.on_stop()
            result = self._stopwatch.reset(emit=False)
            self._stopwatch.on_start()
            return result

    def since_start(self) -> int | None:
        return self._stopwatch.since_start()

    def is_active(self) -> bool:
        return self._stopwatch.is_active()

    def time_remaining(self) -> float:
        """Milliseconds left until on_finish. Negative once overdue."""
        return self._delay - self._stopwatch.time(emit=False)

    def __float__(self) -> float:
        return float(self.time_remaining())

    def __int__(self) -> int:
        return int(self.time_remaining())

    def __str__(self) -> str:
        return f"{self.time_remaining()}/{self._delay}ms"

    def __repr__(self) -> str:
        return (
            f"Timer(delay={self._delay}, remaining={self.time_remaining()}, "
            f"active={self.is_active()})"
        )

    # --- Scheduling ---

    def _reschedule(self) -> None:
        self._schedule(self._delay - self._stopwatch.time(emit=False))

    def _schedule(self, delay: float) -> None:
        with self._lock:
            self._cancel_pending()
            self._token += 1
            token = self._token
            self._pending = self._scheduler.schedule(delay, lambda: self._fire(token))
            logger.debug("timer %#x armed for %sms", id(self), delay)

    def _cancel_pending(self) -> None:
        with self._lock:
            if self._pending is None:
                return
            self._scheduler.cancel(self._pending)
            self._pending = None
            self._token += 1
            logger.debug("timer %#x cancelled", id(self))

    def _fire(self, token: int) -> None:
        with self._lock:
            if token != self._token:
                logger.debug("timer %#x skipped stale callback", id(self))
                return
            self._pending = None
        logger.debug("timer %#x finished", id(self))
        self.on_finish()
