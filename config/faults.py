"""
config/faults.py
────────────────
Fault channels, fault severities, log severities and display configuration.
"""

from enum import Enum


class FaultChannel(str, Enum):
    OVERHEATING = "overheating"
    TORQUE_IMBALANCE = "torqueImbalance"
    ENCODER_LOSS = "encoderLoss"
    POWER_FLUCTUATION = "powerFluctuation"
    GRIPPER_MALFUNCTION = "gripperMalfunction"
    COMM_DELAY = "commDelay"


class FaultSeverity(str, Enum):
    OK = "OK"
    WARNING = "Warning"
    CRITICAL = "Critical"


class LogSeverity(str, Enum):
    INFO = "INFO"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


FAULT_KEYS: list[str] = [channel.value for channel in FaultChannel]

FAULT_LABELS: dict[str, str] = {
    FaultChannel.OVERHEATING: "Motor Overheating",
    FaultChannel.TORQUE_IMBALANCE: "Torque Imbalance",
    FaultChannel.ENCODER_LOSS: "Encoder Signal Loss",
    FaultChannel.POWER_FLUCTUATION: "Power Fluctuation",
    FaultChannel.GRIPPER_MALFUNCTION: "Gripper Malfunction",
    FaultChannel.COMM_DELAY: "Communication Delay",
}

# OK → Warning → Critical → OK
NEXT_SEVERITY: dict[FaultSeverity, FaultSeverity] = {
    FaultSeverity.OK: FaultSeverity.WARNING,
    FaultSeverity.WARNING: FaultSeverity.CRITICAL,
    FaultSeverity.CRITICAL: FaultSeverity.OK,
}

FAULT_COLORS: dict[str, str] = {
    FaultSeverity.OK: "#2ea44f",
    FaultSeverity.WARNING: "#e8a020",
    FaultSeverity.CRITICAL: "#da3633",
}

LOG_SEVERITY_COLORS: dict[str, str] = {
    LogSeverity.INFO: "#58a6ff",
    LogSeverity.HIGH: "#f0883e",
    LogSeverity.CRITICAL: "#da3633",
}
