"""Bounded history of authorization and connection lifecycle events."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Dict, List, Optional


class EventType(str, Enum):
    AUTH_ATTEMPT = "auth_attempt"
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILED = "auth_failed"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    DOCUMENT_LOADED = "document_loaded"


@dataclass(frozen=True, slots=True)
class EventLogEntry:
    event_type: EventType
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user: Optional[str] = None
    room: Optional[str] = None
    connection_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "event": self.event_type.value,
        }
        if self.user is not None:
            payload["user"] = self.user
        if self.room is not None:
            payload["room"] = self.room
        if self.connection_id is not None:
            payload["connectionId"] = self.connection_id
        payload.update(self.details)
        return payload


class EventLog:
    """Fixed-capacity event history; the oldest entry is evicted first.

    Entries are inserted at the head of a bounded deque, so iteration yields
    the newest event first. The log is diagnostic only and never consulted
    for authorization decisions.
    """

    DEFAULT_CAPACITY = 50

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Event log capacity must be positive.")
        self._entries: Deque[EventLogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(
        self,
        event_type: EventType,
        *,
        user: Optional[str] = None,
        room: Optional[str] = None,
        connection_id: Optional[str] = None,
        **details: Any,
    ) -> EventLogEntry:
        entry = EventLogEntry(
            event_type=EventType(event_type),
            user=user,
            room=room,
            connection_id=connection_id,
            details={key: value for key, value in details.items() if value is not None},
        )
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[EventLogEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def snapshot(
        self, *, active_rooms: int = 0, total_connections: int = 0
    ) -> Dict[str, Any]:
        """Return recent entries with the aggregate presence counters."""
        entries = self.entries()
        return {
            "totalEvents": len(entries),
            "logs": [entry.as_dict() for entry in entries],
            "currentState": {
                "activeRooms": active_rooms,
                "totalConnections": total_connections,
            },
        }


__all__ = ["EventLog", "EventLogEntry", "EventType"]
