"""Scheduler - Two periodic triggers driven from one thread.

A fast redraw tick and a slower fetch tick share one loop: the loop
sleeps until whichever deadline comes first, fires it and reschedules
it. The fetch callback also runs once at start-up. Ticks missed while a
callback was running are dropped rather than replayed.
"""

import logging
import threading
import time
from typing import Callable


logger = logging.getLogger(__name__)


class Scheduler:
    """Drives a redraw callback and a fetch callback at fixed intervals."""

    def __init__(
        self,
        redraw_interval: float,
        fetch_interval: float,
        on_redraw: Callable[[], None],
        on_fetch: Callable[[], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize scheduler.

        Args:
            redraw_interval: Seconds between redraw ticks
            fetch_interval: Seconds between fetch ticks
            on_redraw: Called on every redraw tick
            on_fetch: Called at start-up and on every fetch tick
            clock: Monotonic time source
        """
        if redraw_interval <= 0 or fetch_interval <= 0:
            raise ValueError("Intervals must be positive")

        self.redraw_interval = redraw_interval
        self.fetch_interval = fetch_interval
        self.on_redraw = on_redraw
        self.on_fetch = on_fetch
        self.clock = clock
        self._stop = threading.Event()

    def stop(self) -> None:
        """Make run() return at its next wait. Thread-safe."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    @staticmethod
    def _advance(deadline: float, interval: float, now: float) -> float:
        """Return the first deadline after now on the interval grid."""
        while deadline <= now:
            deadline += interval
        return deadline

    def run(self) -> None:
        """Run until stop() is called.

        Exceptions raised by the callbacks propagate to the caller.
        """
        if self.stopped:
            return

        self.on_fetch()

        start = self.clock()
        next_redraw = start + self.redraw_interval
        next_fetch = start + self.fetch_interval

        while True:
            timeout = max(0.0, min(next_redraw, next_fetch) - self.clock())
            if self._stop.wait(timeout):
                logger.debug("Scheduler stopped")
                return

            now = self.clock()
            if now >= next_redraw:
                self.on_redraw()
                next_redraw = self._advance(next_redraw, self.redraw_interval, self.clock())
            if now >= next_fetch:
                self.on_fetch()
                next_fetch = self._advance(next_fetch, self.fetch_interval, self.clock())
