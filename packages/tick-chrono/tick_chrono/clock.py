"""Millisecond time sources."""
from __future__ import annotations

import time

NS_PER_MS = 1_000_000


class MonotonicClock:
    """Monotonic milliseconds. Unaffected by system clock changes."""

    def now(self) -> int:
        return time.monotonic_ns() // NS_PER_MS


class WallClock:
    """Milliseconds since the Unix epoch."""

    def now(self) -> int:
        return time.time_ns() // NS_PER_MS


class ManualClock:
    """Clock that only moves when told to. Used to drive tests and replays."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        self._now += ms
        return self._now

    def set(self, ms: int) -> None:
        self._now = ms

    def reset(self, start: int = 0) -> None:
        self._now = start
