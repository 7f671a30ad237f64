"""Scheduler implementations: worker threads, asyncio, and a manual one for tests."""
from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import threading
from dataclasses import dataclass, field

from tick_chrono.clock import ManualClock
from tick_chrono.types import Hook

logger = logging.getLogger(__name__)


class ThreadingScheduler:
    """Runs each callback on its own daemon ``threading.Timer``."""

    def schedule(self, delay: float, callback: Hook) -> threading.Timer:
        handle = threading.Timer(max(delay, 0) / 1000, callback)
        handle.daemon = True
        handle.start()
        logger.debug("scheduled thread timer in %sms", delay)
        return handle

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    Without an explicit loop, the loop running at ``schedule`` time is used,
    so scheduling must then happen from inside a coroutine or callback.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, delay: float, callback: Hook) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        logger.debug("scheduled loop callback in %sms", delay)
        return loop.call_later(max(delay, 0) / 1000, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


@dataclass(order=True)
class ScheduledCall:
    """A pending call inside a ManualScheduler. Ordered by (due, seq)."""

    due: int
    seq: int
    callback: Hook = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualScheduler:
    """Deterministic scheduler driven by a ManualClock.

    Nothing runs until ``advance`` is called. Due calls run in due order, ties
    in scheduling order, with the clock set to each call's due time while it
    runs. Calls scheduled by a running callback run in the same ``advance`` if
    they fall due before its target time.
    """

    def __init__(self, clock: ManualClock | None = None) -> None:
        self.clock = clock if clock is not None else ManualClock()
        self._heap: list[ScheduledCall] = []
        self._seq = itertools.count()
        self._cancelled = 0

    @property
    def pending_count(self) -> int:
        return len(self._heap) - self._cancelled

    def next_due(self) -> int | None:
        """Due time of the earliest live call, or None when nothing is pending."""
        self._drop_cancelled()
        return self._heap[0].due if self._heap else None

    def schedule(self, delay: float, callback: Hook) -> ScheduledCall:
        call = ScheduledCall(
            due=self.clock.now() + max(delay, 0),
            seq=next(self._seq),
            callback=callback,
        )
        heapq.heappush(self._heap, call)
        return call

    def cancel(self, handle: ScheduledCall) -> None:
        if handle.cancelled:
            return
        handle.cancelled = True
        self._cancelled += 1
        # Keep cancelled entries to at most half the heap.
        if self._cancelled * 2 > len(self._heap):
            self._heap = [call for call in self._heap if not call.cancelled]
            heapq.heapify(self._heap)
            self._cancelled = 0

    def advance(self, ms: int) -> int:
        """Move time forward by ``ms``, running every call that falls due.

        Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError("cannot advance a scheduler backwards")
        target = self.clock.now() + ms
        ran = 0
        while True:
            self._drop_cancelled()
            if not self._heap or self._heap[0].due > target:
                break
            call = heapq.heappop(self._heap)
            if call.due > self.clock.now():
                self.clock.set(call.due)
            call.cancelled = True
            call.callback()
            ran += 1
        self.clock.set(target)
        return ran

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)
            self._cancelled -= 1
