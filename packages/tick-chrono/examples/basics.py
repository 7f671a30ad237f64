"""Stopwatch and Timer basics on a manual clock.

Demonstrates:
- Measuring active time across start/stop cycles
- Undoing a stop with cancel_stop
- A Timer that pauses, resumes and finishes
- Driving everything deterministically with ManualScheduler

Run: python -m examples.basics
"""

from tick_chrono import SECOND, ManualScheduler, Stopwatch, Timer


def main() -> None:
    print("=== Stopwatch ===\n")

    scheduler = ManualScheduler()
    clock = scheduler.clock

    sw = Stopwatch(clock=clock)
    sw.on_stop = lambda: print(f"  stopped at {sw.time(emit=False)}ms")

    sw.start()
    clock.advance(2 * SECOND)
    sw.stop()

    # Oops, that stop was a mistake.
    clock.advance(SECOND)
    sw.cancel_stop()
    print(f"  resumed, total is now {sw}")

    print("\n=== Timer ===\n")

    timer = Timer(
        5 * SECOND,
        callback=lambda: print(f"  finished at t={clock.now()}ms"),
        clock=clock,
        scheduler=scheduler,
    )

    scheduler.advance(2 * SECOND)
    timer.stop()
    print(f"  paused with {timer} left")

    scheduler.advance(10 * SECOND)
    timer.start()
    print(f"  resumed with {timer} left")

    scheduler.advance(5 * SECOND)


if __name__ == "__main__":
    main()
