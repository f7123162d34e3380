"""
config/health.py
────────────────
Health model tuning constants.

State health starts at 100 and loses points for:
  motor_temp     above temp_limit     × temp_penalty per °C
  power          above power_limit    × power_penalty per W
  anomaly_score  above anomaly_limit  × anomaly_penalty per unit
  each fault at Warning / Critical    fixed penalty

Lifetime health loses `wear_rate` every tick regardless of faults.
"""
from dataclasses import dataclass

from config.settings import settings


@dataclass(frozen=True)
class HealthThresholds:
    temp_limit: float = 75.0
    temp_penalty: float = 2.0
    power_limit: float = 2_000.0
    power_penalty: float = 0.02
    anomaly_limit: float = 0.3
    anomaly_penalty: float = 50.0
    warning_penalty: float = 5.0
    critical_penalty: float = 15.0
    wear_rate: float = 0.02


DEFAULT_THRESHOLDS = HealthThresholds(wear_rate=settings.WEAR_RATE)

MAX_HEALTH = 100.0
MIN_HEALTH = 0.0
