"""Tests for ManualScheduler and the Scheduler protocol."""
import pytest

from tick_chrono.clock import ManualClock
from tick_chrono.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    ThreadingScheduler,
)
from tick_chrono.types import Scheduler


class TestManualSchedulerBasics:
    """Scheduling and running calls against a manual clock."""

    def test_creates_own_clock(self):
        scheduler = ManualScheduler()
        assert isinstance(scheduler.clock, ManualClock)
        assert scheduler.clock.now() == 0

    def test_uses_given_clock(self):
        clock = ManualClock(start=100)
        scheduler = ManualScheduler(clock)
        assert scheduler.clock is clock

    def test_nothing_runs_until_advance(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.schedule(0, lambda: fired.append(True))
        assert fired == []
        assert scheduler.pending_count == 1

    def test_call_runs_when_due(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.schedule(100, lambda: fired.append(scheduler.clock.now()))

        assert scheduler.advance(99) == 0
        assert fired == []

        assert scheduler.advance(1) == 1
        assert fired == [100]
        assert scheduler.pending_count == 0

    def test_clock_is_at_due_time_during_callback(self):
        scheduler = ManualScheduler()
        seen = []
        scheduler.schedule(30, lambda: seen.append(scheduler.clock.now()))
        scheduler.schedule(70, lambda: seen.append(scheduler.clock.now()))

        scheduler.advance(500)

        assert seen == [30, 70]
        assert scheduler.clock.now() == 500

    def test_runs_in_due_order(self):
        scheduler = ManualScheduler()
        order = []
        scheduler.schedule(300, lambda: order.append("c"))
        scheduler.schedule(100, lambda: order.append("a"))
        scheduler.schedule(200, lambda: order.append("b"))

        scheduler.advance(1000)
        assert order == ["a", "b", "c"]

    def test_ties_run_in_scheduling_order(self):
        scheduler = ManualScheduler()
        order = []
        for name in ["one", "two", "three"]:
            scheduler.schedule(50, lambda n=name: order.append(n))

        scheduler.advance(50)
        assert order == ["one", "two", "three"]

    def test_call_runs_only_once(self):
        scheduler = ManualScheduler()
        count = [0]

        def cb():
            count[0] += 1

        scheduler.schedule(10, cb)
        scheduler.advance(10)
        scheduler.advance(1000)
        assert count[0] == 1

    def test_negative_delay_is_clamped(self):
        scheduler = ManualScheduler(ManualClock(start=500))
        fired = []
        scheduler.schedule(-200, lambda: fired.append(scheduler.clock.now()))

        assert scheduler.next_due() == 500
        scheduler.advance(0)
        assert fired == [500]

    def test_rejects_negative_advance(self):
        scheduler = ManualScheduler()
        with pytest.raises(ValueError):
            scheduler.advance(-5)


class TestManualSchedulerCancel:
    """Cancellation guarantees."""

    def test_cancelled_call_never_runs(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.schedule(100, lambda: fired.append(True))
        scheduler.cancel(handle)

        scheduler.advance(1000)
        assert fired == []
        assert scheduler.pending_count == 0

    def test_cancel_twice_is_harmless(self):
        scheduler = ManualScheduler()
        handle = scheduler.schedule(100, lambda: None)
        scheduler.cancel(handle)
        scheduler.cancel(handle)
        assert scheduler.pending_count == 0

    def test_cancel_after_fire_is_harmless(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.schedule(10, lambda: fired.append(True))
        scheduler.advance(10)
        scheduler.cancel(handle)
        assert fired == [True]

    def test_next_due_skips_cancelled(self):
        scheduler = ManualScheduler()
        first = scheduler.schedule(10, lambda: None)
        scheduler.schedule(40, lambda: None)
        scheduler.cancel(first)
        assert scheduler.next_due() == 40

    def test_next_due_none_when_empty(self):
        assert ManualScheduler().next_due() is None

    def test_callback_can_cancel_later_call(self):
        scheduler = ManualScheduler()
        fired = []
        later = scheduler.schedule(20, lambda: fired.append("later"))
        scheduler.schedule(10, lambda: scheduler.cancel(later))

        scheduler.advance(100)
        assert fired == []


def test_callback_can_schedule_within_same_advance():
    """A call scheduled by a running callback runs if due before the target."""
    scheduler = ManualScheduler()
    fired = []

    def first():
        fired.append(("first", scheduler.clock.now()))
        scheduler.schedule(25, lambda: fired.append(("second", scheduler.clock.now())))

    scheduler.schedule(50, first)
    scheduler.advance(100)
    assert fired == [("first", 50), ("second", 75)]


def test_callback_exception_propagates():
    scheduler = ManualScheduler()

    def boom():
        raise RuntimeError("boom")

    scheduler.schedule(10, boom)
    with pytest.raises(RuntimeError):
        scheduler.advance(10)


def test_schedulers_satisfy_protocol():
    assert isinstance(ManualScheduler(), Scheduler)
    assert isinstance(ThreadingScheduler(), Scheduler)
    assert isinstance(AsyncioScheduler(), Scheduler)


def test_cancelled_calls_are_compacted():
    """Cancelled calls deep in the heap are dropped without an advance."""
    scheduler = ManualScheduler()
    keep = scheduler.schedule(10, lambda: None)
    for _ in range(500):
        scheduler.cancel(scheduler.schedule(1000, lambda: None))

    assert scheduler.pending_count == 1
    assert len(scheduler._heap) <= 2
    assert scheduler.next_due() == 10
    scheduler.cancel(keep)
    assert scheduler.pending_count == 0


def test_order_survives_compaction():
    """Live calls still run in due order after cancelled ones are compacted."""
    scheduler = ManualScheduler()
    order = []
    scheduler.schedule(30, lambda: order.append("c"))
    doomed = [scheduler.schedule(5, lambda: order.append("x")) for _ in range(10)]
    scheduler.schedule(10, lambda: order.append("a"))
    scheduler.schedule(20, lambda: order.append("b"))
    for handle in doomed:
        scheduler.cancel(handle)

    scheduler.advance(100)
    assert order == ["a", "b", "c"]
