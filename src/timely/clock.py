import threading
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from timely.utils.time import format_clock


class LiveClock:
    """
    Ticks the wall clock on a background thread:
    1. Reads the current time every ``interval`` seconds.
    2. Hands the formatted readout to ``on_tick``.
    3. Stops as soon as ``stop()`` is called or the context exits.
    """

    def __init__(
        self,
        on_tick: Callable[[str], None],
        interval: float = 1.0,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.on_tick = on_tick
        self.interval = interval
        self._now = now
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.current_time = ""

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> str:
        """Reads the clock once and publishes the readout."""
        self.current_time = format_clock(self._now(), seconds=True)
        self.on_tick(self.current_time)
        return self.current_time

    def start(self):
        """Starts ticking in a background thread."""
        if self.running:
            logger.warning("LiveClock is already running.")
            return

        logger.debug(f"Starting LiveClock: Interval={self.interval}s")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self):
        """Stops ticking and waits for the thread to finish."""
        if not self.running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2.0)
        self._thread = None
        logger.debug("LiveClock stopped.")

    def _run(self):
        try:
            while not self._stop_event.is_set():
                self.tick()
                if self._stop_event.wait(timeout=self.interval):
                    return
        except Exception as e:
            logger.exception(f"Error in LiveClock: {e}")

    def __enter__(self) -> "LiveClock":
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()
