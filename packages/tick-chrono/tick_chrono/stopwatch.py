"""Stopwatch - accumulates active time across start/stop cycles."""
from __future__ import annotations

import threading

from tick_chrono.clock import MonotonicClock
from tick_chrono.types import Hook, TimeSource, noop


class Stopwatch:
    """Elapsed-time accumulator with undoable start and stop.

    Operations that do not apply to the current state return False and change
    nothing. Each hook (``on_start``, ``on_stop``, ``on_reset``, ``on_time``) is
    a single slot: assigning a handler replaces the previous one. Hooks run
    synchronously inside the operation that triggers them.

    Args:
        auto_start: start immediately on construction.
        clock: millisecond time source, defaults to MonotonicClock.
    """

    def __init__(
        self, auto_start: bool = False, *, clock: TimeSource | None = None
    ) -> None:
        self._clock: TimeSource = clock if clock is not None else MonotonicClock()
        self._lock = threading.RLock()
        self._total = 0
        self._started_at: int | None = None
        self._last_stop: int | None = None
        self._active = False

        self.on_start: Hook = noop
        self.on_stop: Hook = noop
        self.on_reset: Hook = noop
        self.on_time: Hook = noop

        if auto_start:
            self.start()

    def start(self, emit: bool = True) -> bool:
        """Start measuring. Returns False if already running."""
        with self._lock:
            if self._active:
                return False
            self._started_at = self._clock.now()
            self._active = True
            if emit:
                self.on_start()
            return True

    def stop(self, emit: bool = True) -> bool:
        """Stop measuring and add the interval to the total.

        Returns False if the stopwatch is not running.
        """
        with self._lock:
            if self._started_at is None or not self._active:
                return False
            self._last_stop = self._clock.now() - self._started_at
            self._total += self._last_stop
            self._active = False
            if emit:
                self.on_stop()
            return True

    def toggle(self, emit: bool = True) -> bool:
        """Stop if running, start otherwise. Returns the new running state."""
        with self._lock:
            if self._active:
                self.stop(emit)
                return False
            self.start(emit)
            return True

    def reset(self, emit: bool = True) -> bool:
        """Zero the total and restart the current interval from now.

        The running state is kept. Returns False if never started, otherwise
        whether the stopwatch is running.
        """
        with self._lock:
            if self._started_at is None:
                return False
            if emit:
                self.on_reset()
            self._started_at = self._clock.now()
            self._total = 0
            return self._active

    def cancel_start(self) -> bool:
        """Stop without adding the running interval to the total."""
        with self._lock:
            if not self._active:
                return False
            self._active = False
            return True

    def cancel_stop(self) -> bool:
        """Undo the last stop: take its interval back out and resume."""
        with self._lock:
            if self._active:
                return False
            # Running always implies a start timestamp.
            if self._started_at is None:
                self._started_at = self._clock.now()
            self._active = True
            self._total -= self._last_stop or 0
            return True

    def is_active(self) -> bool:
        return self._active

    def time(self, emit: bool = True) -> int:
        """Total active milliseconds, including the running interval."""
        with self._lock:
            if emit:
                self.on_time()
            return self._total + (self.since_start() or 0)

    def since_start(self) -> int | None:
        """Milliseconds since the latest start, or None when not running."""
        with self._lock:
            if self._started_at is None or not self._active:
                return None
            return self._clock.now() - self._started_at

    def __float__(self) -> float:
        return float(self.time())

    def __int__(self) -> int:
        return int(self.time())

    def __str__(self) -> str:
        return f"{self.time()}ms"

    def __repr__(self) -> str:
        return f"Stopwatch(active={self._active}, time={self.time(emit=False)}ms)"
