"""
src/simulation/maintenance_log.py
─────────────────────────────────
Newest-first, bounded log of operational events.

Every change is pushed to subscribers as a `logUpdate` event carrying the
full log. Clearing re-adds an INFO entry so the clear itself stays on record.
"""
from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from config.faults import LogSeverity
from src.data.models import LogEntry

if TYPE_CHECKING:
    from src.simulation.broadcaster import EventBroadcaster

CLEARED_MESSAGE = "Logs cleared"


def _millis() -> int:
    return time.time_ns() // 1_000_000


class MaintenanceLog:
    def __init__(
        self,
        capacity: int = 50,
        broadcaster: EventBroadcaster | None = None,
        millis: Callable[[], int] = _millis,
    ) -> None:
        self.capacity = capacity
        self._broadcaster = broadcaster
        self._millis = millis
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._last_id = 0

    def _next_id(self) -> int:
        # Time based, bumped when two entries share a millisecond.
        self._last_id = max(self._millis(), self._last_id + 1)
        return self._last_id

    def append(self, severity: LogSeverity | str, message: str) -> LogEntry:
        """Insert at the front, evicting the oldest entry when full."""
        entry = LogEntry(
            id=self._next_id(),
            timestamp=datetime.now(tz=UTC),
            severity=LogSeverity(severity),
            message=message,
        )
        self._entries.appendleft(entry)
        self._publish()
        return entry

    def clear(self) -> LogEntry:
        self._entries.clear()
        return self.append(LogSeverity.INFO, CLEARED_MESSAGE)

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def as_payload(self) -> list[dict]:
        return [entry.model_dump(mode="json") for entry in self._entries]

    def _publish(self) -> None:
        if self._broadcaster is not None:
            self._broadcaster.publish("logUpdate", self.as_payload())

    def __len__(self) -> int:
        return len(self._entries)
