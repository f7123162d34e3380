"""
src/simulation/engine.py
────────────────────────
Digital twin engine: the single owner of all mutable simulation state.

State bundle (guarded by one re-entrant lock):
  FaultRegistry   six fault channels
  HealthModel     lifetime wear + last published health
  SlidingWindow   newest telemetry frames
  MaintenanceLog  newest-first operational events
  is_shutdown     latch, cleared only by restart()

The clock thread, HTTP handlers and console callbacks all enter through
the public methods below; transport code never touches the parts directly.

Outbound events:
  initialData  newData  healthUpdate  faultUpdate  logUpdate  shutdown  systemReset
"""
from __future__ import annotations

import logging
import threading
from typing import Any

from config.faults import FaultSeverity, LogSeverity
from config.health import DEFAULT_THRESHOLDS, HealthThresholds
from config.settings import settings
from src.analytics.health import HealthModel
from src.data.models import HealthReading, LogEntry, TelemetryFrame
from src.data.telemetry import TelemetryGenerator
from src.simulation.broadcaster import EventBroadcaster, Subscription
from src.simulation.clock import SimulationClock
from src.simulation.faults import FaultRegistry, UnknownFaultError
from src.simulation.maintenance_log import MaintenanceLog
from src.simulation.window import SlidingWindow

logger = logging.getLogger(__name__)

EMERGENCY_REASON = "EMERGENCY SHUTDOWN"
EMERGENCY_MESSAGE = "Emergency shutdown - Health depleted"
MANUAL_REASON = "System manually shutdown"
RESTART_MESSAGE = "System restarted successfully"


def _frame_payload(frame: TelemetryFrame) -> dict:
    return frame.model_dump(mode="json")


class TwinEngine:
    """
    Args:
        generator: Telemetry source (seeded for reproducible runs)
        thresholds: Health penalties and wear rate
        window_capacity: Frames kept for charting; also the seed length
        log_capacity: Maintenance log entries kept
        tick_interval_s: Clock period
        broadcaster: Event fan-out; a private one is created if omitted
    """

    def __init__(
        self,
        generator: TelemetryGenerator | None = None,
        thresholds: HealthThresholds = DEFAULT_THRESHOLDS,
        window_capacity: int = settings.WINDOW_CAPACITY,
        log_capacity: int = settings.LOG_CAPACITY,
        tick_interval_s: float = settings.TICK_INTERVAL_S,
        broadcaster: EventBroadcaster | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self.broadcaster = broadcaster or EventBroadcaster(settings.SUBSCRIBER_QUEUE_SIZE)
        self.generator = generator or TelemetryGenerator(period_s=tick_interval_s)
        self.log = MaintenanceLog(log_capacity, broadcaster=self.broadcaster)
        self.fault_registry = FaultRegistry(self.log)
        self.window = SlidingWindow(window_capacity)
        self.health_model = HealthModel(thresholds)
        self.clock = SimulationClock(self.step, interval_s=tick_interval_s)
        self._is_shutdown = False
        self._started = False
        self._reseed()

    # ── Read-only views ───────────────────────────────────────────────────────

    @property
    def is_shutdown(self) -> bool:
        with self._lock:
            return self._is_shutdown

    @property
    def health(self) -> float:
        with self._lock:
            return self.health_model.health

    @property
    def state_health(self) -> float:
        with self._lock:
            return self.health_model.state_health

    @property
    def lifetime_health(self) -> float:
        with self._lock:
            return self.health_model.lifetime_health

    @property
    def faults(self) -> dict[str, FaultSeverity]:
        with self._lock:
            return self.fault_registry.snapshot()

    @property
    def frames(self) -> list[TelemetryFrame]:
        with self._lock:
            return self.window.frames()

    def logs(self) -> list[LogEntry]:
        with self._lock:
            return self.log.entries()

    def snapshot(self) -> dict[str, Any]:
        """Consolidated state, as sent to a newly connected subscriber."""
        with self._lock:
            return {
                "frames": [_frame_payload(f) for f in self.window.frames()],
                "health": self.health_model.health,
                "faults": self.fault_registry.as_payload(),
                "logs": self.log.as_payload(),
                "isShutdown": self._is_shutdown,
            }

    def status(self) -> dict[str, Any]:
        """Health breakdown and run state, without the frame history."""
        with self._lock:
            return {
                "health": self.health_model.health,
                "stateHealth": self.health_model.state_health,
                "lifetimeHealth": self.health_model.lifetime_health,
                "faults": self.fault_registry.as_payload(),
                "activeFaults": list(self.fault_registry.active()),
                "isShutdown": self._is_shutdown,
                "clockRunning": self.clock.is_running,
                "frameCount": len(self.window),
                "subscribers": self.broadcaster.subscriber_count,
            }

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        with self._lock:
            self._started = True
            if not self._is_shutdown:
                self.clock.start()
        logger.info("Twin engine started")

    def stop(self) -> None:
        with self._lock:
            self._started = False
            self.clock.stop()
        logger.info("Twin engine stopped")

    # ── Simulation step ───────────────────────────────────────────────────────

    def step(self) -> HealthReading | None:
        """
        One simulation tick: generate → window → health → broadcast.

        Returns the health reading, or None when the engine is shut down.
        """
        with self._lock:
            if self._is_shutdown:
                return None

            previous = self.window.latest()
            if previous is None:
                previous = self.generator.seed(1)[0]
                self.window.append(previous)

            faults = self.fault_registry.snapshot()
            frame = self.generator.next(previous, faults)
            self.window.append(frame)
            reading = self.health_model.tick(frame, faults)

            if reading.shutdown_triggered:
                self._enter_shutdown(LogSeverity.CRITICAL, EMERGENCY_MESSAGE, EMERGENCY_REASON)
                logger.warning("Health depleted; emergency shutdown")
                return reading

            self.broadcaster.publish("newData", _frame_payload(frame))
            self.broadcaster.publish("healthUpdate", reading.health)
            return reading

    # ── Commands ──────────────────────────────────────────────────────────────

    def toggle_fault(self, key: str) -> FaultSeverity | None:
        """
        Cycle one fault channel. Ignored while shut down (returns the current
        severity unchanged) and for unknown keys (returns None).
        """
        with self._lock:
            try:
                current = self.fault_registry.get(key)
            except UnknownFaultError:
                logger.warning("Ignoring toggle for unknown fault channel %r", key)
                return None
            if self._is_shutdown:
                logger.debug("Ignoring toggle of %s while shut down", key)
                return current
            new = self.fault_registry.toggle(key)
            self.broadcaster.publish("faultUpdate", self.fault_registry.as_payload())
            logger.info("Fault %s → %s", key, new.value)
            return new

    def shutdown(self) -> bool:
        """Manual shutdown. Returns False if already shut down."""
        with self._lock:
            if self._is_shutdown:
                logger.debug("Ignoring shutdown: already shut down")
                return False
            self._enter_shutdown(LogSeverity.INFO, MANUAL_REASON, MANUAL_REASON)
            logger.info("System manually shut down")
            return True

    def restart(self) -> None:
        """Reset faults, wear and window; clear the shutdown latch."""
        with self._lock:
            self._is_shutdown = False
            self.fault_registry.reset()
            self._reseed()
            self.log.append(LogSeverity.INFO, RESTART_MESSAGE)
            self.broadcaster.publish(
                "systemReset",
                {
                    "frames": [_frame_payload(f) for f in self.window.frames()],
                    "health": self.health_model.health,
                    "faults": self.fault_registry.as_payload(),
                    "isShutdown": False,
                },
            )
            if self._started:
                self.clock.start()
        logger.info("System restarted")

    # ── Log management ────────────────────────────────────────────────────────

    def add_log(self, severity: LogSeverity | str, message: str) -> LogEntry:
        with self._lock:
            return self.log.append(severity, message)

    def clear_logs(self) -> LogEntry:
        with self._lock:
            return self.log.clear()

    # ── Subscribers ───────────────────────────────────────────────────────────

    def connect(self) -> Subscription:
        """Register a subscriber and hand it the current state as `initialData`."""
        with self._lock:
            sub = self.broadcaster.subscribe()
            self.broadcaster.send(sub, "initialData", self.snapshot())
            return sub

    def disconnect(self, sub: Subscription) -> None:
        self.broadcaster.unsubscribe(sub)

    # ── Internals ─────────────────────────────────────────────────────────────

    def _reseed(self) -> None:
        self.window.replace(self.generator.seed(self.window.capacity))
        self.health_model.reset(self.window.latest(), self.fault_registry.snapshot())

    def _enter_shutdown(self, severity: LogSeverity, message: str, reason: str) -> None:
        self._is_shutdown = True
        self.clock.stop()
        self.log.append(severity, message)
        self.broadcaster.publish("shutdown", reason)
