"""
src/simulation/clock.py
───────────────────────
Fixed-period scheduler driving one simulation step per tick.

Runs the callback on a single daemon thread, so ticks never overlap;
`tick()` can also be called directly (tests, manual stepping) and is
skipped while another tick is in progress.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class SimulationClock:
    def __init__(self, on_tick: Callable[[], None], interval_s: float = 3.0) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.interval_s = interval_s
        self._on_tick = on_tick
        self._tick_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._thread is not None and not self._stop.is_set()

    def start(self) -> None:
        with self._state_lock:
            if self._thread is not None and not self._stop.is_set():
                return
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop,),
                daemon=True,
                name="SimulationClock",
            )
            self._thread.start()
        logger.info("Simulation clock started (period %.2fs)", self.interval_s)

    def stop(self) -> None:
        """
        Signal the timer thread to exit. Does not join; callable from a tick.
        Each thread watches its own stop event, so start() can re-arm at once.
        """
        with self._state_lock:
            if self._thread is None:
                return
            self._stop.set()
            self._thread = None
        logger.info("Simulation clock stopped")

    def tick(self) -> bool:
        """Run one tick now. Returns False if a tick was already in progress."""
        if not self._tick_lock.acquire(blocking=False):
            logger.debug("Tick skipped: previous tick still running")
            return False
        try:
            self._on_tick()
            self.ticks += 1
        except Exception:
            logger.exception("Simulation tick failed")
        finally:
            self._tick_lock.release()
        return True

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval_s):
            self.tick()
