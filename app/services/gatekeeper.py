"""
Authorization of live connections into document rooms.

Every connection attempt runs through one of two paths:

* token path: the presented access token is verified and must name the room
  being joined. A mismatched room is terminal and never falls back to the
  credential path.
* credential path: docId, pin and a display name must all be present; the
  pair is resolved through the same lookup the join endpoint uses.

Only a fully authorized attempt is registered with the presence tracker, and
registration is the last step, so a rejected attempt leaves nothing behind.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from app.core.errors import (
    DocumentNotFoundError,
    InternalServiceError,
    InvalidInputError,
    UnauthorizedError,
)
from app.services.credentials import CredentialIssuer
from app.services.event_log import EventLog, EventType
from app.services.metrics import SessionMetrics
from app.services.presence import PresenceTracker
from app.services.token_verifier import TokenVerifier

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "User"


class RejectionReason(str, Enum):
    INVALID_TOKEN = "invalid_token"
    MISMATCHED_ROOM = "mismatched_room"
    MISSING_PARAMETERS = "missing_params"
    INVALID_CREDENTIALS = "invalid_credentials"
    INTERNAL_ERROR = "internal_error"


class AuthMethod(str, Enum):
    TOKEN = "token"
    CREDENTIALS = "credentials"


class ConnectionRejected(Exception):
    """Raised when a live connection attempt is refused."""

    def __init__(self, reason: RejectionReason, message: str = "Unauthorized") -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


@dataclass(frozen=True, slots=True)
class ConnectionParams:
    """Credentials presented when opening a live connection."""

    token: Optional[str] = None
    doc_id: Optional[str] = None
    pin: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "ConnectionParams":
        def _clean(key: str) -> Optional[str]:
            value = query.get(key)
            if value is None:
                return None
            value = value.strip()
            return value or None

        return cls(
            token=_clean("token"),
            doc_id=_clean("docId"),
            pin=_clean("pin"),
            display_name=_clean("name"),
        )


@dataclass(frozen=True, slots=True)
class AuthorizedConnection:
    room_id: str
    connection_id: str
    display_name: str
    method: AuthMethod
    user_count: int


class RoomGatekeeper:
    """Authorize live connections and register them with the presence tracker."""

    def __init__(
        self,
        *,
        verifier: TokenVerifier,
        issuer: CredentialIssuer,
        presence: PresenceTracker,
        event_log: EventLog,
        metrics: Optional[SessionMetrics] = None,
    ) -> None:
        self._verifier = verifier
        self._issuer = issuer
        self._presence = presence
        self._event_log = event_log
        self._metrics = metrics

    async def authorize(
        self, room_id: str, connection_id: str, params: ConnectionParams
    ) -> AuthorizedConnection:
        """Run one authorization attempt; raises ``ConnectionRejected`` on refusal."""
        logger.info(
            "Auth attempt room=%s hasToken=%s docId=%s name=%s",
            room_id,
            bool(params.token),
            params.doc_id,
            params.display_name,
        )
        self._event_log.append(
            EventType.AUTH_ATTEMPT,
            user=params.display_name,
            room=room_id,
            connection_id=connection_id,
            has_token=bool(params.token),
            doc_id=params.doc_id,
        )

        try:
            if params.token:
                method, display_name = await self._authorize_token(room_id, params)
            else:
                method, display_name = await self._authorize_credentials(
                    room_id, params
                )
        except ConnectionRejected as rejection:
            logger.warning(
                "Auth failed room=%s reason=%s", room_id, rejection.reason.value
            )
            self._event_log.append(
                EventType.AUTH_FAILED,
                room=room_id,
                connection_id=connection_id,
                reason=rejection.reason.value,
            )
            if self._metrics is not None:
                self._metrics.record_auth(
                    outcome="rejected", label=rejection.reason.value
                )
            raise

        self._event_log.append(
            EventType.AUTH_SUCCESS,
            user=display_name,
            room=room_id,
            connection_id=connection_id,
            method=method.value,
        )
        if self._metrics is not None:
            self._metrics.record_auth(outcome="authorized", label=method.value)

        user_count = self._presence.on_join(room_id, connection_id, display_name)
        if user_count == 1:
            self._event_log.append(EventType.DOCUMENT_LOADED, room=room_id)

        return AuthorizedConnection(
            room_id=room_id,
            connection_id=connection_id,
            display_name=display_name,
            method=method,
            user_count=user_count,
        )

    def release(self, room_id: str, connection_id: str) -> int:
        """Deregister a connection once its transport has closed."""
        return self._presence.on_leave(room_id, connection_id)

    async def _authorize_token(
        self, room_id: str, params: ConnectionParams
    ) -> tuple[AuthMethod, str]:
        try:
            verified = await asyncio.to_thread(self._verifier.verify, params.token)
        except (UnauthorizedError, DocumentNotFoundError, InvalidInputError) as exc:
            raise ConnectionRejected(
                RejectionReason.INVALID_TOKEN, "Unauthorized - Invalid token"
            ) from exc
        except InternalServiceError as exc:
            logger.exception("Token verification failed for room=%s", room_id)
            raise ConnectionRejected(RejectionReason.INTERNAL_ERROR) from exc

        if verified.room_id != room_id:
            raise ConnectionRejected(
                RejectionReason.MISMATCHED_ROOM, "Unauthorized - Token is for another room"
            )
        return AuthMethod.TOKEN, params.display_name or DEFAULT_DISPLAY_NAME

    async def _authorize_credentials(
        self, room_id: str, params: ConnectionParams
    ) -> tuple[AuthMethod, str]:
        if not (params.doc_id and params.pin and params.display_name):
            raise ConnectionRejected(
                RejectionReason.MISSING_PARAMETERS,
                "Unauthorized - Missing docId, pin, or name",
            )

        try:
            document = await asyncio.to_thread(
                self._issuer.resolve_credentials, params.doc_id, params.pin
            )
        except (DocumentNotFoundError, InvalidInputError) as exc:
            raise ConnectionRejected(RejectionReason.INVALID_CREDENTIALS) from exc
        except InternalServiceError as exc:
            logger.exception("Credential lookup failed for room=%s", room_id)
            raise ConnectionRejected(RejectionReason.INTERNAL_ERROR) from exc

        if document.room_id != room_id:
            raise ConnectionRejected(
                RejectionReason.MISMATCHED_ROOM, "Unauthorized - Credentials are for another room"
            )
        return AuthMethod.CREDENTIALS, params.display_name


__all__ = [
    "AuthMethod",
    "AuthorizedConnection",
    "ConnectionParams",
    "ConnectionRejected",
    "RejectionReason",
    "RoomGatekeeper",
]
