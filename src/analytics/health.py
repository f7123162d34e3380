"""
src/analytics/health.py
───────────────────────
Composite health model for the robotic arm.

Two components:
  state_health     derived from the current frame and fault severities only
  lifetime_health  irreversible wear, loses `wear_rate` every tick

Published health = min(lifetime_health, state_health), clamped to [0, 100].
A perfect instantaneous reading cannot hide accumulated wear, and good
historical wear cannot hide a momentary fault. Health at 0 means shutdown.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from config.faults import FaultSeverity
from config.health import DEFAULT_THRESHOLDS, MAX_HEALTH, MIN_HEALTH, HealthThresholds
from src.data.models import HealthReading, TelemetryFrame

# Lifetime wear is kept at this precision so repeated decrements land on 0 exactly.
_WEAR_DECIMALS = 6


# ── Penalty helpers ───────────────────────────────────────────────────────────


def _excess_penalty(value: float, limit: float, coefficient: float) -> float:
    return max(0.0, value - limit) * coefficient


def _fault_penalty(faults: Mapping[str, FaultSeverity], thr: HealthThresholds) -> float:
    penalty = 0.0
    for severity in faults.values():
        if severity == FaultSeverity.CRITICAL:
            penalty += thr.critical_penalty
        elif severity == FaultSeverity.WARNING:
            penalty += thr.warning_penalty
    return penalty


def _clamp(value: float) -> float:
    return float(np.clip(value, MIN_HEALTH, MAX_HEALTH))


# ── Main API ──────────────────────────────────────────────────────────────────


def compute_state_health(
    frame: TelemetryFrame,
    faults: Mapping[str, FaultSeverity],
    thr: HealthThresholds = DEFAULT_THRESHOLDS,
) -> float:
    """Instantaneous health of a single frame under the given fault states."""
    h = MAX_HEALTH
    h -= _excess_penalty(frame.motor_temp, thr.temp_limit, thr.temp_penalty)
    h -= _excess_penalty(frame.power, thr.power_limit, thr.power_penalty)
    h -= _excess_penalty(frame.anomaly_score, thr.anomaly_limit, thr.anomaly_penalty)
    h -= _fault_penalty(faults, thr)
    return _clamp(h)


def apply_wear(prior_lifetime: float, wear_rate: float) -> float:
    """One tick of irreversible wear, floored at 0."""
    return round(max(MIN_HEALTH, prior_lifetime - wear_rate), _WEAR_DECIMALS)


def combine(lifetime_health: float, state_health: float) -> float:
    """Published health is the worse of cumulative wear and current state."""
    return _clamp(min(lifetime_health, state_health))


def evaluate(
    frame: TelemetryFrame,
    faults: Mapping[str, FaultSeverity],
    prior_lifetime: float,
    thr: HealthThresholds = DEFAULT_THRESHOLDS,
) -> HealthReading:
    """
    One health-model tick.

    Args:
        frame: Newly generated frame
        faults: Current severity per fault channel
        prior_lifetime: Lifetime health before this tick
        thr: Penalty coefficients and wear rate

    Returns:
        HealthReading with shutdown_triggered set when health reached 0
    """
    lifetime = apply_wear(prior_lifetime, thr.wear_rate)
    state = compute_state_health(frame, faults, thr)
    health = combine(lifetime, state)
    return HealthReading(
        state_health=state,
        lifetime_health=lifetime,
        health=health,
        shutdown_triggered=health <= MIN_HEALTH,
    )


class HealthModel:
    """Holds the lifetime wear between ticks and the last published reading."""

    def __init__(self, thresholds: HealthThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds
        self.lifetime_health = MAX_HEALTH
        self.state_health = MAX_HEALTH
        self.health = MAX_HEALTH

    def tick(self, frame: TelemetryFrame, faults: Mapping[str, FaultSeverity]) -> HealthReading:
        reading = evaluate(frame, faults, self.lifetime_health, self.thresholds)
        self._store(reading)
        return reading

    def reset(self, frame: TelemetryFrame, faults: Mapping[str, FaultSeverity]) -> HealthReading:
        """Restore full lifetime and recompute health from `frame` without wear."""
        state = compute_state_health(frame, faults, self.thresholds)
        reading = HealthReading(
            state_health=state,
            lifetime_health=MAX_HEALTH,
            health=combine(MAX_HEALTH, state),
        )
        self._store(reading)
        return reading

    def _store(self, reading: HealthReading) -> None:
        self.lifetime_health = reading.lifetime_health
        self.state_health = reading.state_health
        self.health = reading.health
