from __future__ import annotations

import pytest

from app.services.event_log import EventLog, EventType


def test_capacity_is_bounded_and_oldest_evicted() -> None:
    log = EventLog()

    for index in range(1, 52):
        log.append(EventType.AUTH_ATTEMPT, room=f"room-{index}")

    entries = log.entries()
    rooms = [entry.room for entry in entries]
    assert len(entries) == 50
    assert "room-1" not in rooms
    assert "room-51" in rooms
    assert rooms[0] == "room-51"
    assert rooms[-1] == "room-2"


def test_log_never_exceeds_capacity() -> None:
    log = EventLog(capacity=3)

    for _ in range(10):
        log.append(EventType.CONNECTED)
        assert len(log) <= 3


def test_snapshot_includes_counters_and_details() -> None:
    log = EventLog()
    log.append(
        EventType.AUTH_FAILED,
        room="room-1",
        connection_id="conn-1",
        reason="missing_params",
        doc_id=None,
    )

    snapshot = log.snapshot(active_rooms=2, total_connections=5)

    assert snapshot["totalEvents"] == 1
    assert snapshot["currentState"] == {"activeRooms": 2, "totalConnections": 5}
    entry = snapshot["logs"][0]
    assert entry["event"] == "auth_failed"
    assert entry["room"] == "room-1"
    assert entry["connectionId"] == "conn-1"
    assert entry["reason"] == "missing_params"
    assert "doc_id" not in entry


def test_unknown_event_type_is_refused() -> None:
    log = EventLog()

    with pytest.raises(ValueError):
        log.append("password_reset")  # type: ignore[arg-type]


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        EventLog(capacity=0)


def test_shared_event_log_keeps_fifty_entries() -> None:
    from app.dependencies import get_event_log

    assert get_event_log().capacity == 50
