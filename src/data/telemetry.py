"""
src/data/telemetry.py
─────────────────────
Synthetic telemetry generator for the robotic arm.

Generates:
  - A smooth sinusoidal history used to seed the sliding window
  - The next frame from the previous one, biased by active fault channels

Design:
  - Reproducible with a seeded numpy Generator for tests and demos
  - Channel behaviour comes from the rule table in src.data.channels;
    this module only walks the table
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta

import numpy as np

from config.faults import FaultSeverity
from config.settings import settings
from src.data.channels import CHANNEL_RULES, ChannelRule, next_value, seed_value
from src.data.models import TelemetryFrame


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class TelemetryGenerator:
    """
    Produces TelemetryFrames from the previous frame and the fault states.

    Args:
        seed: Seed for the internal numpy Generator (ignored if `rng` given)
        rng: Explicit random source
        clock: Wall-clock source for frame timestamps
        period_s: Spacing between seeded history frames
        rules: Channel rule table, keyed by frame field name
    """

    def __init__(
        self,
        seed: int | None = settings.SIMULATION_SEED,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] = _utc_now,
        period_s: float = settings.TICK_INTERVAL_S,
        rules: Mapping[str, ChannelRule] = CHANNEL_RULES,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._clock = clock
        self._period = timedelta(seconds=period_s)
        self._rules = rules

    def next(
        self,
        previous: TelemetryFrame,
        faults: Mapping[str, FaultSeverity],
    ) -> TelemetryFrame:
        """Random-walk every channel one step from `previous`."""
        values = {
            name: next_value(getattr(previous, name), rule, faults, self.rng)
            for name, rule in self._rules.items()
        }
        return TelemetryFrame(timestamp=self._clock(), **values)

    def seed(self, count: int) -> list[TelemetryFrame]:
        """
        Build `count` frames of smooth synthetic history.

        Timestamps are spaced one tick period apart and end at the current
        wall-clock time, oldest first.
        """
        end = self._clock()
        start = end - self._period * (count - 1)
        frames: list[TelemetryFrame] = []
        for i in range(count):
            values = {name: seed_value(i, rule, self.rng) for name, rule in self._rules.items()}
            frames.append(TelemetryFrame(timestamp=start + self._period * i, **values))
        return frames
