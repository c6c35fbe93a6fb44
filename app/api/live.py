"""
Live-session endpoints: the room WebSocket and its diagnostics surface.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect

from app.dependencies import (
    get_live_channel_hub,
    get_presence_tracker,
    get_room_gatekeeper,
    get_session_metrics,
)
from app.services import ConnectionParams, ConnectionRejected, RejectionReason

router = APIRouter()
logger = logging.getLogger(__name__)

CLOSE_CODES = {
    RejectionReason.INVALID_TOKEN: 4401,
    RejectionReason.MISMATCHED_ROOM: 4401,
    RejectionReason.INVALID_CREDENTIALS: 4401,
    RejectionReason.MISSING_PARAMETERS: 4400,
    RejectionReason.INTERNAL_ERROR: 1011,
}


def _epoch_ms() -> int:
    return int(time.time() * 1000)


@router.websocket("/{room_id}")
async def live_session(
    websocket: WebSocket,
    room_id: str,
    gatekeeper: Annotated[Any, Depends(get_room_gatekeeper)],
    hub: Annotated[Any, Depends(get_live_channel_hub)],
    metrics: Annotated[Any, Depends(get_session_metrics)],
) -> None:
    """Authorize the socket for ``room_id`` and relay frames until it closes."""
    connection_id = uuid.uuid4().hex
    params = ConnectionParams.from_query(websocket.query_params)

    try:
        authorized = await gatekeeper.authorize(room_id, connection_id, params)
    except ConnectionRejected as rejection:
        # Closing before accept turns into an HTTP 403 on real servers, hiding the code.
        await websocket.accept()
        await websocket.close(code=CLOSE_CODES[rejection.reason], reason=rejection.message)
        return

    hub.attach(room_id, connection_id, websocket)
    metrics.socket_opened()
    try:
        await websocket.accept()
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            frame = message.get("bytes")
            if frame is None:
                frame = message.get("text")
            if frame is not None:
                await hub.relay(room_id, connection_id, frame)
    except WebSocketDisconnect:
        logger.debug("Socket dropped room=%s connection=%s", room_id, connection_id)
    finally:
        hub.detach(room_id, connection_id)
        metrics.socket_closed()
        gatekeeper.release(room_id, authorized.connection_id)


@router.get("/health", status_code=HTTPStatus.OK)
async def live_health(
    request: Request,
    presence: Annotated[Any, Depends(get_presence_tracker)],
) -> dict:
    """Liveness plus current occupancy."""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - started_at, 3),
        "activeRooms": presence.active_room_count(),
        "totalConnections": presence.total_connections(),
    }


@router.get("/rooms", status_code=HTTPStatus.OK)
async def list_rooms(
    presence: Annotated[Any, Depends(get_presence_tracker)],
) -> dict:
    """All tracked rooms with their connection counts."""
    rooms = [
        {"roomId": room.room_id, "userCount": room.count}
        for room in presence.list_rooms()
    ]
    return {"totalRooms": len(rooms), "rooms": rooms, "timestamp": _epoch_ms()}


@router.get("/rooms/{room_id}", status_code=HTTPStatus.OK)
async def room_count(
    room_id: str,
    presence: Annotated[Any, Depends(get_presence_tracker)],
) -> dict:
    """Connection count for one room; unknown rooms report zero."""
    user_count = presence.get_count(room_id)
    logger.debug("Room count query room=%s users=%d", room_id, user_count)
    return {"roomId": room_id, "userCount": user_count, "timestamp": _epoch_ms()}


@router.get("/events", status_code=HTTPStatus.OK)
async def recent_events(
    presence: Annotated[Any, Depends(get_presence_tracker)],
) -> dict:
    """Recent bounded connection history with aggregate counters."""
    return {"success": True, **presence.diagnostics()}


@router.get("/metrics", status_code=HTTPStatus.OK)
async def metrics_snapshot(
    metrics: Annotated[Any, Depends(get_session_metrics)],
) -> dict:
    """Request and authorization counters."""
    return metrics.snapshot()


__all__ = ["CLOSE_CODES", "router"]
