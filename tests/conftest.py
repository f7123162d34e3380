"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the robotic arm twin test suite.
"""
import os

# Settings read the environment at import time
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("TICK_INTERVAL_S", "3.0")
os.environ.setdefault("WEAR_RATE", "0.02")

from datetime import datetime, timezone

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


NOMINAL_VALUES = {
    "j1_angle": 45.0, "j2_angle": 60.0, "j3_angle": 30.0,
    "j4_angle": 90.0, "j5_angle": 120.0, "j6_angle": 180.0,
    "j1_torque": 50.0, "j2_torque": 45.0, "j3_torque": 40.0,
    "ee_x": 500.0, "ee_y": 300.0, "ee_z": 200.0,
    "motor_temp": 65.0, "power": 1_500.0, "current": 8.5, "rpm": 1_200.0,
    "payload": 5.2, "cycle_time": 2.5, "anomaly_score": 0.15,
}


@pytest.fixture
def make_frame(now):
    """Factory: a nominal frame with selected channels overridden."""
    from src.data.models import TelemetryFrame

    def _make(**overrides) -> TelemetryFrame:
        timestamp = overrides.pop("timestamp", now)
        return TelemetryFrame(timestamp=timestamp, **{**NOMINAL_VALUES, **overrides})

    return _make


@pytest.fixture
def sample_frame(make_frame):
    return make_frame()


@pytest.fixture
def hot_frame(make_frame):
    """Overheating, over-power and anomalous reading."""
    return make_frame(motor_temp=90.0, power=2_400.0, anomaly_score=0.7)


@pytest.fixture
def all_ok():
    from config.faults import FAULT_KEYS, FaultSeverity
    return {key: FaultSeverity.OK for key in FAULT_KEYS}


@pytest.fixture
def generator(now):
    from src.data.telemetry import TelemetryGenerator
    return TelemetryGenerator(seed=42, clock=lambda: now, period_s=3.0)


@pytest.fixture
def engine(generator):
    """Engine with a seeded generator and a slow clock; stepped manually."""
    from src.simulation.engine import TwinEngine

    eng = TwinEngine(generator=generator, tick_interval_s=60.0)
    yield eng
    eng.stop()


@pytest.fixture
def subscriber(engine):
    """Connected subscriber with the initialData event already consumed."""
    sub = engine.connect()
    first = sub.get(timeout=0)
    assert first is not None and first.name == "initialData"
    yield sub
    engine.disconnect(sub)
