"""
src/data/channels.py
────────────────────
Declarative per-channel drift rules for the robotic arm telemetry.

Every channel has:
  normal drift    : mean-reverting random walk inside a fixed clamp range
  degraded drift  : optional biased walk used while its mapped fault is not OK
  seed pattern    : smooth sinusoid used to synthesize startup history

Degraded variants:
  overheating        motor_temp     strictly rising toward 95 °C
  torqueImbalance    j1_torque      strictly rising
  powerFluctuation   power          wide symmetric jitter, wider range
  encoderLoss        rpm            strictly falling, no floor recovery
  gripperMalfunction payload        strictly falling toward 0 kg
  commDelay          cycle_time     strictly rising
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

import numpy as np

from config.faults import FaultChannel, FaultSeverity

MEAN_REVERSION = 0.1


@dataclass(frozen=True)
class DegradedDrift:
    fault: FaultChannel
    delta_low: float    # per-tick increment drawn from U(delta_low, delta_high)
    delta_high: float
    low: float          # clamp range while degraded
    high: float


@dataclass(frozen=True)
class SeedPattern:
    amplitude: float
    frequency: float
    wave: Callable[[float], float] = np.sin
    jitter: float = 0.0  # width of uniform noise added on top of the wave


@dataclass(frozen=True)
class ChannelRule:
    name: str
    nominal: float
    low: float
    high: float
    step: float          # width of the uniform perturbation in normal operation
    seed: SeedPattern
    degraded: DegradedDrift | None = None
    decimals: int = 3

    @property
    def fault(self) -> FaultChannel | None:
        return self.degraded.fault if self.degraded else None


def _rule(name, nominal, low, high, step, seed, degraded=None, decimals=3) -> ChannelRule:
    return ChannelRule(name, nominal, low, high, step, seed, degraded, decimals)


# ── Rule table ────────────────────────────────────────────────────────────────

CHANNEL_RULES: dict[str, ChannelRule] = {
    rule.name: rule
    for rule in [
        _rule("j1_angle", 45.0, 0.0, 360.0, 8.0, SeedPattern(15.0, 0.3)),
        _rule("j2_angle", 60.0, 0.0, 360.0, 8.0, SeedPattern(20.0, 0.4, np.cos)),
        _rule("j3_angle", 30.0, 0.0, 360.0, 8.0, SeedPattern(10.0, 0.5)),
        _rule("j4_angle", 90.0, 0.0, 360.0, 8.0, SeedPattern(12.0, 0.35)),
        _rule("j5_angle", 120.0, 0.0, 360.0, 8.0, SeedPattern(18.0, 0.45, np.cos)),
        _rule("j6_angle", 180.0, 0.0, 360.0, 8.0, SeedPattern(14.0, 0.55)),
        _rule(
            "j1_torque", 50.0, 0.0, 120.0, 5.0, SeedPattern(15.0, 0.6),
            DegradedDrift(FaultChannel.TORQUE_IMBALANCE, 0.0, 10.0, 0.0, 200.0),
        ),
        _rule("j2_torque", 45.0, 0.0, 120.0, 5.0, SeedPattern(12.0, 0.5, np.cos)),
        _rule("j3_torque", 40.0, 0.0, 120.0, 5.0, SeedPattern(10.0, 0.7)),
        _rule("ee_x", 500.0, 200.0, 800.0, 20.0, SeedPattern(100.0, 0.3)),
        _rule("ee_y", 300.0, 100.0, 500.0, 20.0, SeedPattern(80.0, 0.4, np.cos)),
        _rule("ee_z", 200.0, 0.0, 400.0, 20.0, SeedPattern(60.0, 0.5)),
        _rule(
            "motor_temp", 65.0, 50.0, 85.0, 5.0, SeedPattern(10.0, 0.2),
            DegradedDrift(FaultChannel.OVERHEATING, 0.0, 2.0, 50.0, 95.0),
            decimals=2,
        ),
        _rule(
            "power", 1_500.0, 1_000.0, 2_200.0, 200.0, SeedPattern(300.0, 0.4),
            DegradedDrift(FaultChannel.POWER_FLUCTUATION, -200.0, 200.0, 0.0, 4_000.0),
            decimals=1,
        ),
        _rule("current", 8.5, 7.0, 11.0, 0.8, SeedPattern(2.0, 0.5)),
        _rule(
            "rpm", 1_200.0, 800.0, 1_500.0, 150.0, SeedPattern(200.0, 0.6),
            DegradedDrift(FaultChannel.ENCODER_LOSS, -100.0, 0.0, 0.0, 1_500.0),
            decimals=1,
        ),
        _rule(
            "payload", 5.2, 3.0, 8.0, 0.5, SeedPattern(1.5, 0.3),
            DegradedDrift(FaultChannel.GRIPPER_MALFUNCTION, -2.0, 0.0, 0.0, 8.0),
        ),
        _rule(
            "cycle_time", 2.5, 2.0, 3.5, 0.3, SeedPattern(0.0, 0.0, jitter=0.3),
            DegradedDrift(FaultChannel.COMM_DELAY, 0.0, 0.5, 2.0, 10.0),
        ),
        _rule("anomaly_score", 0.15, 0.0, 1.0, 0.1, SeedPattern(0.1, 0.8), decimals=4),
    ]
}

CHANNEL_NAMES = list(CHANNEL_RULES.keys())


# ── Drift functions ───────────────────────────────────────────────────────────

def mean_revert(prev: float, rule: ChannelRule, rng: np.random.Generator) -> float:
    """Pull toward nominal, add U(-step/2, step/2) noise, clamp to the normal range."""
    pull = MEAN_REVERSION * (rule.nominal - prev)
    noise = rng.uniform(-rule.step / 2.0, rule.step / 2.0)
    return float(np.clip(prev + pull + noise, rule.low, rule.high))


def degrade(prev: float, drift: DegradedDrift, rng: np.random.Generator) -> float:
    """Biased walk with no pull back toward nominal."""
    delta = rng.uniform(drift.delta_low, drift.delta_high)
    return float(np.clip(prev + delta, drift.low, drift.high))


def is_degraded(rule: ChannelRule, faults: Mapping[str, FaultSeverity]) -> bool:
    if rule.degraded is None:
        return False
    return faults.get(rule.degraded.fault.value, FaultSeverity.OK) != FaultSeverity.OK


def next_value(
    prev: float,
    rule: ChannelRule,
    faults: Mapping[str, FaultSeverity],
    rng: np.random.Generator,
) -> float:
    if is_degraded(rule, faults):
        value = degrade(prev, rule.degraded, rng)
    else:
        value = mean_revert(prev, rule, rng)
    return round(value, rule.decimals)


def seed_value(index: int, rule: ChannelRule, rng: np.random.Generator) -> float:
    """Smooth synthetic history value for position `index` in the seed sequence."""
    pattern = rule.seed
    value = rule.nominal + pattern.amplitude * float(pattern.wave(index * pattern.frequency))
    if pattern.jitter:
        value += rng.uniform(-pattern.jitter / 2.0, pattern.jitter / 2.0)
    return round(float(np.clip(value, rule.low, rule.high)), rule.decimals)
