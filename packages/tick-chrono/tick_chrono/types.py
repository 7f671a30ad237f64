"""Shared type aliases and protocols for tick-chrono."""
from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

Hook = Callable[[], None]


def noop() -> None:
    """Default handler for every hook slot."""


@runtime_checkable
class TimeSource(Protocol):
    """Anything that reports the current time in milliseconds."""

    def now(self) -> int:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Deferred-callback facility used by Timer.

    Implementations clamp negative delays to 0. Cancelling a handle before its
    callback runs guarantees the callback never runs; cancelling a handle that
    already fired or was already cancelled does nothing.
    """

    def schedule(self, delay: float, callback: Hook) -> Any:
        """Run ``callback`` after ``delay`` milliseconds. Returns a handle."""
        ...

    def cancel(self, handle: Any) -> None:
        ...
