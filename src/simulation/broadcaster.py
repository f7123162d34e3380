"""
src/simulation/broadcaster.py
─────────────────────────────
Publish/subscribe fan-out of named state-change events.

Delivery is best-effort:
  - each subscriber owns a bounded queue
  - publishing never blocks; a full queue drops its oldest event
  - a failing subscriber is logged and skipped, never raised to the caller
"""
from __future__ import annotations

import itertools
import json
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    name: str
    payload: Any

    def to_sse(self) -> str:
        """Render as a Server-Sent Events message."""
        return f"event: {self.name}\ndata: {json.dumps(self.payload)}\n\n"


class Subscription:
    _ids = itertools.count(1)

    def __init__(self, maxsize: int = 256) -> None:
        self.id = next(self._ids)
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def deliver(self, event: Event) -> None:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            # drop_oldest
            try:
                self._queue.get_nowait()
            except queue.Empty:
                pass
            self.dropped += 1
            self._queue.put_nowait(event)

    def get(self, timeout: float | None = None) -> Event | None:
        """Next event, or None if nothing arrived within `timeout` seconds."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[Event]:
        events: list[Event] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events


class EventBroadcaster:
    def __init__(self, queue_size: int = 256) -> None:
        self.queue_size = queue_size
        self._subscribers: dict[int, Subscription] = {}
        self._lock = threading.Lock()

    def subscribe(self) -> Subscription:
        sub = Subscription(maxsize=self.queue_size)
        with self._lock:
            self._subscribers[sub.id] = sub
        logger.info("Subscriber %s connected (%d total)", sub.id, len(self._subscribers))
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            removed = self._subscribers.pop(sub.id, None)
        if removed is not None:
            logger.info("Subscriber %s disconnected", sub.id)

    def send(self, sub: Subscription, name: str, payload: Any) -> None:
        """Deliver one event to a single subscriber."""
        self._deliver(sub, Event(name, payload))

    def publish(self, name: str, payload: Any) -> None:
        """Deliver one event to every subscriber registered right now."""
        event = Event(name, payload)
        with self._lock:
            targets = list(self._subscribers.values())
        for sub in targets:
            self._deliver(sub, event)

    def _deliver(self, sub: Subscription, event: Event) -> None:
        dropped = sub.dropped
        try:
            sub.deliver(event)
        except Exception:
            logger.exception("Delivery of %r to subscriber %s failed", event.name, sub.id)
            return
        if sub.dropped > dropped:
            logger.warning("Subscriber %s is lagging; dropped oldest event", sub.id)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)
