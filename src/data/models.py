"""
src/data/models.py
──────────────────
Pydantic v2 data models for telemetry frames, log entries and health readings.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from config.faults import LogSeverity


class TelemetryFrame(BaseModel):
    """One synthetic multi-channel reading of the arm. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime

    # Joint angles (deg)
    j1_angle: float = Field(ge=0.0, le=360.0)
    j2_angle: float = Field(ge=0.0, le=360.0)
    j3_angle: float = Field(ge=0.0, le=360.0)
    j4_angle: float = Field(ge=0.0, le=360.0)
    j5_angle: float = Field(ge=0.0, le=360.0)
    j6_angle: float = Field(ge=0.0, le=360.0)

    # Joint torques (Nm)
    j1_torque: float = Field(ge=0.0, le=200.0)
    j2_torque: float = Field(ge=0.0, le=200.0)
    j3_torque: float = Field(ge=0.0, le=200.0)

    # End-effector position (mm)
    ee_x: float = Field(ge=0.0, le=1_000.0)
    ee_y: float = Field(ge=0.0, le=1_000.0)
    ee_z: float = Field(ge=0.0, le=1_000.0)

    motor_temp: float = Field(ge=0.0, le=150.0)
    power: float = Field(ge=0.0, le=5_000.0)
    current: float = Field(ge=0.0, le=50.0)
    rpm: float = Field(ge=0.0, le=3_000.0)
    payload: float = Field(ge=0.0, le=20.0)
    cycle_time: float = Field(ge=0.0, le=20.0)
    anomaly_score: float = Field(ge=0.0, le=1.0)

    @computed_field
    @property
    def time(self) -> str:
        """Wall-clock label used as chart x-axis by dashboards."""
        return self.timestamp.astimezone().strftime("%H:%M:%S")


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    timestamp: datetime
    severity: LogSeverity
    message: str


class LogCreate(BaseModel):
    """Body of an out-of-band log submission."""
    severity: LogSeverity
    message: str = Field(min_length=1)


class FaultToggle(BaseModel):
    """Body of a toggleFault command."""
    fault: str = Field(min_length=1)


class HealthReading(BaseModel):
    state_health: float = Field(ge=0.0, le=100.0)
    lifetime_health: float = Field(ge=0.0, le=100.0)
    health: float = Field(ge=0.0, le=100.0)
    shutdown_triggered: bool = False
