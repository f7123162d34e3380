"""
tests/test_engine.py
─────────────────────
Tests for the digital twin engine: stepping, commands, shutdown and restart.
"""
import pytest

from config.faults import FAULT_KEYS, FaultSeverity, LogSeverity
from config.health import HealthThresholds
from src.simulation.engine import (
    EMERGENCY_MESSAGE,
    EMERGENCY_REASON,
    MANUAL_REASON,
    RESTART_MESSAGE,
    TwinEngine,
)


def _names(sub):
    return [e.name for e in sub.drain()]


@pytest.fixture
def fast_wear_engine(generator):
    """Lifetime health hits zero on the fourth tick."""
    eng = TwinEngine(
        generator=generator,
        thresholds=HealthThresholds(wear_rate=25.0),
        tick_interval_s=60.0,
    )
    yield eng
    eng.stop()


class TestInitialState:
    def test_window_seeded(self, engine):
        assert len(engine.frames) == 20

    def test_all_faults_ok(self, engine):
        assert engine.faults == {key: FaultSeverity.OK for key in FAULT_KEYS}

    def test_full_health(self, engine):
        assert engine.lifetime_health == 100.0
        assert engine.health == 100.0
        assert not engine.is_shutdown

    def test_log_empty(self, engine):
        assert engine.logs() == []

    def test_status(self, engine):
        status = engine.status()
        assert status["frameCount"] == 20
        assert status["activeFaults"] == []
        assert status["clockRunning"] is False
        assert status["isShutdown"] is False


class TestConnect:
    def test_initial_data_snapshot(self, engine):
        sub = engine.connect()
        event = sub.get(timeout=0)
        assert event.name == "initialData"
        payload = event.payload
        assert set(payload) == {"frames", "health", "faults", "logs", "isShutdown"}
        assert len(payload["frames"]) == 20
        assert payload["faults"]["overheating"] == "OK"
        assert payload["isShutdown"] is False
        engine.disconnect(sub)

    def test_existing_subscribers_not_sent_initial_data(self, engine, subscriber):
        other = engine.connect()
        assert subscriber.drain() == []
        engine.disconnect(other)

    def test_disconnect(self, engine):
        sub = engine.connect()
        engine.disconnect(sub)
        assert engine.status()["subscribers"] == 0


class TestStep:
    def test_appends_frame_and_broadcasts(self, engine, subscriber):
        before = engine.frames
        reading = engine.step()
        after = engine.frames
        assert len(after) == 20
        assert after[:-1] == before[1:]
        events = subscriber.drain()
        assert [e.name for e in events] == ["newData", "healthUpdate"]
        assert events[0].payload == after[-1].model_dump(mode="json")
        assert events[1].payload == reading.health

    def test_lifetime_wears_each_tick(self, engine):
        engine.step()
        engine.step()
        assert engine.lifetime_health == pytest.approx(99.96)

    def test_seeds_when_window_empty(self, engine):
        engine.window.replace([])
        engine.step()
        assert len(engine.frames) == 2

    def test_invariants_over_many_ticks(self, engine):
        engine.toggle_fault("powerFluctuation")
        engine.toggle_fault("commDelay")
        lifetime = engine.lifetime_health
        for _ in range(100):
            reading = engine.step()
            assert 0.0 <= reading.health <= 100.0
            assert reading.health <= reading.lifetime_health
            assert reading.lifetime_health < lifetime
            lifetime = reading.lifetime_health
            assert len(engine.frames) == 20


class TestToggleFault:
    def test_cycles_and_broadcasts(self, engine, subscriber):
        assert engine.toggle_fault("overheating") == FaultSeverity.WARNING
        events = subscriber.drain()
        assert [e.name for e in events] == ["logUpdate", "faultUpdate"]
        assert events[1].payload["overheating"] == "Warning"
        assert engine.logs()[0].message == "Motor Overheating - Warning"
        assert engine.logs()[0].severity == LogSeverity.HIGH

    def test_critical_logged_as_critical(self, engine):
        engine.toggle_fault("torqueImbalance")
        engine.toggle_fault("torqueImbalance")
        assert engine.logs()[0].severity == LogSeverity.CRITICAL
        assert engine.logs()[0].message == "Torque Imbalance - Critical"

    def test_back_to_ok_not_logged(self, engine):
        for _ in range(3):
            engine.toggle_fault("commDelay")
        assert engine.faults["commDelay"] == FaultSeverity.OK
        assert len(engine.logs()) == 2

    def test_unknown_fault_ignored(self, engine, subscriber):
        assert engine.toggle_fault("laserMisfire") is None
        assert subscriber.drain() == []
        assert engine.logs() == []

    def test_overheating_raises_temperature_and_costs_health(self, engine):
        engine.toggle_fault("overheating")
        engine.toggle_fault("overheating")
        for _ in range(60):
            engine.step()
        assert engine.frames[-1].motor_temp == 95.0
        # at least 15 (critical fault) + 40 (20 °C over the limit)
        assert engine.state_health <= 45.0
        assert engine.health == engine.state_health

    def test_ignored_while_shut_down(self, engine, subscriber):
        engine.shutdown()
        subscriber.drain()
        assert engine.toggle_fault("overheating") == FaultSeverity.OK
        assert engine.faults["overheating"] == FaultSeverity.OK
        assert subscriber.drain() == []


class TestManualShutdown:
    def test_latches_and_logs(self, engine, subscriber):
        assert engine.shutdown() is True
        assert engine.is_shutdown
        events = subscriber.drain()
        assert [e.name for e in events] == ["logUpdate", "shutdown"]
        assert events[1].payload == MANUAL_REASON
        assert engine.logs()[0].severity == LogSeverity.INFO
        assert engine.logs()[0].message == MANUAL_REASON

    def test_second_shutdown_is_noop(self, engine, subscriber):
        engine.shutdown()
        subscriber.drain()
        assert engine.shutdown() is False
        assert subscriber.drain() == []
        assert len(engine.logs()) == 1

    def test_no_ticks_after_shutdown(self, engine, subscriber):
        engine.shutdown()
        subscriber.drain()
        frames = engine.frames
        assert engine.step() is None
        assert engine.frames == frames
        assert subscriber.drain() == []

    def test_stops_clock(self, engine):
        engine.start()
        assert engine.clock.is_running
        engine.shutdown()
        assert not engine.clock.is_running


class TestEmergencyShutdown:
    def test_health_depletion_shuts_down(self, fast_wear_engine):
        sub = fast_wear_engine.connect()
        sub.drain()
        readings = [fast_wear_engine.step() for _ in range(4)]
        assert [r.shutdown_triggered for r in readings] == [False, False, False, True]
        assert fast_wear_engine.is_shutdown
        assert fast_wear_engine.health == 0.0

        names = _names(sub)
        assert names.count("newData") == 3
        assert names[-2:] == ["logUpdate", "shutdown"]

        critical = [e for e in fast_wear_engine.logs() if e.severity == LogSeverity.CRITICAL]
        assert len(critical) == 1
        assert critical[0].message == EMERGENCY_MESSAGE

        assert fast_wear_engine.step() is None
        assert sub.drain() == []
        fast_wear_engine.disconnect(sub)

    def test_shutdown_reason(self, fast_wear_engine):
        sub = fast_wear_engine.connect()
        sub.drain()
        for _ in range(4):
            fast_wear_engine.step()
        shutdown = [e for e in sub.drain() if e.name == "shutdown"]
        assert shutdown[0].payload == EMERGENCY_REASON
        fast_wear_engine.disconnect(sub)


class TestRestart:
    def test_restores_initial_state(self, engine, subscriber):
        engine.toggle_fault("encoderLoss")
        for _ in range(5):
            engine.step()
        engine.shutdown()
        subscriber.drain()

        engine.restart()

        assert not engine.is_shutdown
        assert engine.faults == {key: FaultSeverity.OK for key in FAULT_KEYS}
        assert engine.lifetime_health == 100.0
        assert len(engine.frames) == 20
        assert engine.logs()[0].message == RESTART_MESSAGE

        events = subscriber.drain()
        assert [e.name for e in events] == ["logUpdate", "systemReset"]
        payload = events[1].payload
        assert payload["isShutdown"] is False
        assert len(payload["frames"]) == 20
        assert set(payload["faults"].values()) == {"OK"}

    def test_keeps_log_history(self, engine):
        engine.toggle_fault("overheating")
        engine.shutdown()
        engine.restart()
        assert [e.message for e in engine.logs()] == [
            RESTART_MESSAGE,
            MANUAL_REASON,
            "Motor Overheating - Warning",
        ]

    def test_rearms_clock(self, engine):
        engine.start()
        engine.shutdown()
        engine.restart()
        assert engine.clock.is_running

    def test_does_not_start_stopped_engine(self, engine):
        engine.shutdown()
        engine.restart()
        assert not engine.clock.is_running

    def test_ticks_resume(self, fast_wear_engine):
        for _ in range(4):
            fast_wear_engine.step()
        fast_wear_engine.restart()
        reading = fast_wear_engine.step()
        assert reading is not None
        assert reading.lifetime_health == 75.0


class TestLogs:
    def test_add_log(self, engine, subscriber):
        entry = engine.add_log("HIGH", "Bearing noise reported")
        assert engine.logs()[0] == entry
        assert _names(subscriber) == ["logUpdate"]

    def test_clear_logs(self, engine):
        engine.add_log(LogSeverity.INFO, "a")
        engine.add_log(LogSeverity.INFO, "b")
        engine.clear_logs()
        logs = engine.logs()
        assert len(logs) == 1
        assert logs[0].message == "Logs cleared"
