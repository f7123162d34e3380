"""
tests/test_maintenance_log.py
──────────────────────────────
Tests for the bounded maintenance log.
"""
import pytest

from config.faults import LogSeverity
from src.simulation.broadcaster import EventBroadcaster
from src.simulation.maintenance_log import CLEARED_MESSAGE, MaintenanceLog


class TestMaintenanceLog:
    def test_newest_first(self):
        log = MaintenanceLog()
        log.append(LogSeverity.INFO, "first")
        log.append(LogSeverity.HIGH, "second")
        assert [e.message for e in log.entries()] == ["second", "first"]

    def test_capacity_evicts_oldest(self):
        log = MaintenanceLog(capacity=50)
        for i in range(60):
            log.append(LogSeverity.INFO, f"event {i}")
        entries = log.entries()
        assert len(entries) == 50
        assert entries[0].message == "event 59"
        assert entries[-1].message == "event 10"

    def test_ids_unique_within_same_millisecond(self):
        log = MaintenanceLog(millis=lambda: 1_700_000_000_000)
        ids = [log.append(LogSeverity.INFO, str(i)).id for i in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5
        assert ids[0] == 1_700_000_000_000

    def test_accepts_plain_string_severity(self):
        entry = MaintenanceLog().append("CRITICAL", "boom")
        assert entry.severity == LogSeverity.CRITICAL

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValueError):
            MaintenanceLog().append("LOW", "nope")

    def test_clear_leaves_single_entry(self):
        log = MaintenanceLog()
        for i in range(5):
            log.append(LogSeverity.HIGH, str(i))
        entry = log.clear()
        assert len(log) == 1
        assert entry.severity == LogSeverity.INFO
        assert log.entries()[0].message == CLEARED_MESSAGE

    def test_every_change_broadcasts_full_log(self):
        broadcaster = EventBroadcaster()
        sub = broadcaster.subscribe()
        log = MaintenanceLog(broadcaster=broadcaster)
        log.append(LogSeverity.INFO, "a")
        log.append(LogSeverity.HIGH, "b")
        events = sub.drain()
        assert [e.name for e in events] == ["logUpdate", "logUpdate"]
        assert [e["message"] for e in events[-1].payload] == ["b", "a"]
        assert events[-1].payload[0]["severity"] == "HIGH"
