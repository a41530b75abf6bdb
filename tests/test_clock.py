import threading
import time
from datetime import datetime

from timely.clock import LiveClock


def fixed_now():
    return datetime(2024, 5, 6, 9, 5, 7)


def test_tick_formats_current_time():
    readouts = []
    clock = LiveClock(readouts.append, now=fixed_now)

    assert clock.tick() == "09:05:07 AM"
    assert readouts == ["09:05:07 AM"]
    assert clock.current_time == "09:05:07 AM"


def test_clock_ticks_until_stopped():
    ticked = threading.Event()
    readouts = []

    def on_tick(value):
        readouts.append(value)
        if len(readouts) >= 3:
            ticked.set()

    clock = LiveClock(on_tick, interval=0.01, now=fixed_now)
    clock.start()
    assert ticked.wait(timeout=5)
    clock.stop()

    assert not clock.running
    count = len(readouts)
    time.sleep(0.05)
    # No ticks after stop
    assert len(readouts) == count


def test_clock_as_context_manager():
    ticked = threading.Event()
    with LiveClock(lambda _: ticked.set(), interval=0.01, now=fixed_now) as clock:
        assert clock.running
        assert ticked.wait(timeout=5)
    assert not clock.running


def test_start_twice_keeps_one_thread():
    clock = LiveClock(lambda _: None, interval=0.01, now=fixed_now)
    clock.start()
    thread = clock._thread
    clock.start()
    assert clock._thread is thread
    clock.stop()


def test_stop_without_start_is_a_no_op():
    clock = LiveClock(lambda _: None)
    clock.stop()
    assert not clock.running
