"""Per-room tracking of currently open live connections."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from app.services.event_log import EventLog, EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoomConnection:
    room_id: str
    connection_id: str
    display_name: str
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class RoomOccupancy:
    room_id: str
    count: int


class PresenceTracker:
    """Registry of room id to the connections currently joined to it.

    A single registry-wide lock guards every mutation. Room cardinality is
    expected to stay modest, and one lock makes join/leave on the same room
    atomic, including the removal of a room that has just become empty. The
    lock is never held across I/O or while writing to the event log.
    """

    def __init__(self, event_log: EventLog) -> None:
        self._event_log = event_log
        self._rooms: Dict[str, Dict[str, RoomConnection]] = {}
        self._lock = threading.Lock()

    def on_join(self, room_id: str, connection_id: str, display_name: str) -> int:
        """Register a connection and return the room's new size."""
        connection = RoomConnection(
            room_id=room_id, connection_id=connection_id, display_name=display_name
        )
        with self._lock:
            members = self._rooms.setdefault(room_id, {})
            members[connection_id] = connection
            count = len(members)

        logger.info(
            "Connected user=%s room=%s users=%d", display_name, room_id, count
        )
        self._event_log.append(
            EventType.CONNECTED,
            user=display_name,
            room=room_id,
            connection_id=connection_id,
            user_count=count,
        )
        return count

    def on_leave(self, room_id: str, connection_id: str) -> int:
        """Remove a connection, dropping the room once it is empty."""
        display_name = None
        with self._lock:
            members = self._rooms.get(room_id)
            if members is not None:
                removed = members.pop(connection_id, None)
                if removed is not None:
                    display_name = removed.display_name
                if not members:
                    del self._rooms[room_id]
                    count = 0
                else:
                    count = len(members)
            else:
                count = 0

        if display_name is None:
            return count

        logger.info(
            "Disconnected user=%s room=%s users=%d", display_name, room_id, count
        )
        self._event_log.append(
            EventType.DISCONNECTED,
            user=display_name,
            room=room_id,
            connection_id=connection_id,
            user_count=count,
        )
        return count

    def get_count(self, room_id: str) -> int:
        with self._lock:
            members = self._rooms.get(room_id)
            return len(members) if members else 0

    def list_rooms(self) -> List[RoomOccupancy]:
        with self._lock:
            return [
                RoomOccupancy(room_id=room_id, count=len(members))
                for room_id, members in self._rooms.items()
            ]

    def connections(self, room_id: str) -> List[RoomConnection]:
        with self._lock:
            return list(self._rooms.get(room_id, {}).values())

    def active_room_count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def total_connections(self) -> int:
        with self._lock:
            return sum(len(members) for members in self._rooms.values())

    def diagnostics(self) -> dict:
        """Event log snapshot enriched with current occupancy counters."""
        with self._lock:
            active_rooms = len(self._rooms)
            total = sum(len(members) for members in self._rooms.values())
        return self._event_log.snapshot(
            active_rooms=active_rooms, total_connections=total
        )


__all__ = ["PresenceTracker", "RoomConnection", "RoomOccupancy"]
