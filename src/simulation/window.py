"""
src/simulation/window.py
────────────────────────
Bounded FIFO of the most recent telemetry frames, consumed for charting.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from src.data.models import TelemetryFrame


class SlidingWindow:
    def __init__(self, capacity: int = 20) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._frames: deque[TelemetryFrame] = deque(maxlen=capacity)

    def append(self, frame: TelemetryFrame) -> None:
        """Add the newest frame; the oldest is evicted when full."""
        self._frames.append(frame)

    def replace(self, frames: Iterable[TelemetryFrame]) -> None:
        """Drop the current contents and load `frames` (oldest first)."""
        self._frames.clear()
        self._frames.extend(frames)

    def latest(self) -> TelemetryFrame | None:
        return self._frames[-1] if self._frames else None

    def frames(self) -> list[TelemetryFrame]:
        return list(self._frames)

    def __len__(self) -> int:
        return len(self._frames)
