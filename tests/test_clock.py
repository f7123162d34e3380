"""
tests/test_clock.py
────────────────────
Tests for the fixed-period simulation clock.
"""
import threading

import pytest

from src.simulation.clock import SimulationClock


class TestSimulationClock:
    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            SimulationClock(lambda: None, interval_s=0)

    def test_manual_tick(self):
        calls = []
        clock = SimulationClock(lambda: calls.append(1), interval_s=60.0)
        assert clock.tick() is True
        assert calls == [1]
        assert clock.ticks == 1

    def test_overlapping_tick_is_skipped(self):
        results = []
        clock = SimulationClock(lambda: results.append(clock.tick()), interval_s=60.0)
        clock.tick()
        assert results == [False]
        assert clock.ticks == 1

    def test_failing_tick_does_not_raise(self):
        def boom():
            raise RuntimeError("tick failed")

        clock = SimulationClock(boom, interval_s=60.0)
        assert clock.tick() is True
        assert clock.ticks == 0
        # lock released after the failure
        assert clock.tick() is True

    def test_start_runs_ticks_until_stopped(self):
        fired = threading.Event()
        clock = SimulationClock(fired.set, interval_s=0.01)
        clock.start()
        try:
            assert clock.is_running
            assert fired.wait(timeout=2.0)
        finally:
            clock.stop()
        assert not clock.is_running

    def test_start_is_idempotent(self):
        clock = SimulationClock(lambda: None, interval_s=60.0)
        clock.start()
        thread = clock._thread
        clock.start()
        assert clock._thread is thread
        clock.stop()

    def test_stop_from_inside_tick(self):
        stopped = threading.Event()

        def on_tick():
            clock.stop()
            stopped.set()

        clock = SimulationClock(on_tick, interval_s=0.01)
        clock.start()
        assert stopped.wait(timeout=2.0)
        assert not clock.is_running

    def test_restart_after_stop(self):
        clock = SimulationClock(lambda: None, interval_s=60.0)
        clock.start()
        clock.stop()
        clock.start()
        assert clock.is_running
        clock.stop()

    def test_stop_when_idle(self):
        clock = SimulationClock(lambda: None)
        clock.stop()
        assert not clock.is_running
