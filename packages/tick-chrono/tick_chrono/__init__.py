"""tick-chrono - Stopwatch and countdown Timer primitives."""
from __future__ import annotations

from tick_chrono.clock import ManualClock, MonotonicClock, WallClock
from tick_chrono.scheduler import AsyncioScheduler, ManualScheduler, ThreadingScheduler
from tick_chrono.stopwatch import Stopwatch
from tick_chrono.timer import Timer
from tick_chrono.types import Hook, Scheduler, TimeSource
from tick_chrono.units import DAY, HOUR, MINUTE, MONTH, SECOND, UNITS, WEEK, YEAR

__all__ = [
    "Stopwatch",
    "Timer",
    "MonotonicClock",
    "WallClock",
    "ManualClock",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "Hook",
    "TimeSource",
    "Scheduler",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "MONTH",
    "YEAR",
    "UNITS",
]
