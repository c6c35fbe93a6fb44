"""Relay frames between the sockets joined to the same room.

The merge engine that interprets these frames lives outside this service;
the hub only forwards what one peer sends to every other peer in the room.
"""

from __future__ import annotations

import logging
from typing import Dict, Union

from fastapi import WebSocket

logger = logging.getLogger(__name__)

Frame = Union[str, bytes]


class LiveChannelHub:
    """Keep the open sockets of each room for fan-out."""

    def __init__(self) -> None:
        self._rooms: Dict[str, Dict[str, WebSocket]] = {}

    def attach(self, room_id: str, connection_id: str, websocket: WebSocket) -> None:
        self._rooms.setdefault(room_id, {})[connection_id] = websocket

    def detach(self, room_id: str, connection_id: str) -> None:
        sockets = self._rooms.get(room_id)
        if sockets is None:
            return
        sockets.pop(connection_id, None)
        if not sockets:
            del self._rooms[room_id]

    def peers(self, room_id: str) -> int:
        return len(self._rooms.get(room_id, {}))

    async def relay(self, room_id: str, sender_id: str, frame: Frame) -> int:
        """Forward ``frame`` to every other socket in the room; returns deliveries."""
        delivered = 0
        for connection_id, websocket in list(self._rooms.get(room_id, {}).items()):
            if connection_id == sender_id:
                continue
            try:
                if isinstance(frame, bytes):
                    await websocket.send_bytes(frame)
                else:
                    await websocket.send_text(frame)
            except (RuntimeError, ConnectionError):
                logger.warning(
                    "Dropping unreachable peer room=%s connection=%s",
                    room_id,
                    connection_id,
                )
                self.detach(room_id, connection_id)
                continue
            delivered += 1
        return delivered


__all__ = ["LiveChannelHub"]
