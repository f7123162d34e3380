"""
src/simulation/faults.py
────────────────────────
Fault injection registry: six fixed channels, each cycling
OK → Warning → Critical → OK on command.
"""
from __future__ import annotations

from config.faults import FAULT_KEYS, FAULT_LABELS, NEXT_SEVERITY, FaultSeverity, LogSeverity
from src.simulation.maintenance_log import MaintenanceLog


class UnknownFaultError(KeyError):
    """Raised for a channel key outside the fixed fault set."""


class FaultRegistry:
    def __init__(self, log: MaintenanceLog) -> None:
        self._log = log
        self._states: dict[str, FaultSeverity] = {key: FaultSeverity.OK for key in FAULT_KEYS}

    def get(self, key: str) -> FaultSeverity:
        try:
            return self._states[key]
        except KeyError:
            raise UnknownFaultError(key) from None

    def toggle(self, key: str) -> FaultSeverity:
        """
        Advance `key` one step through the severity cycle.

        Leaving OK is logged (CRITICAL for Critical, HIGH for Warning);
        returning to OK is not.
        """
        new = NEXT_SEVERITY[self.get(key)]
        self._states[key] = new
        if new != FaultSeverity.OK:
            severity = LogSeverity.CRITICAL if new == FaultSeverity.CRITICAL else LogSeverity.HIGH
            self._log.append(severity, f"{FAULT_LABELS[key]} - {new.value}")
        return new

    def reset(self) -> None:
        for key in self._states:
            self._states[key] = FaultSeverity.OK

    def active(self) -> dict[str, FaultSeverity]:
        return {k: v for k, v in self._states.items() if v != FaultSeverity.OK}

    def snapshot(self) -> dict[str, FaultSeverity]:
        return dict(self._states)

    def as_payload(self) -> dict[str, str]:
        return {k: v.value for k, v in self._states.items()}
