"""Service layer exports."""

from .access_tokens import AccessTokenClaims, AccessTokenService
from .credentials import CredentialIssuer, IssuedDocument, JoinedDocument
from .event_log import EventLog, EventLogEntry, EventType
from .gatekeeper import (
    AuthMethod,
    AuthorizedConnection,
    ConnectionParams,
    ConnectionRejected,
    RejectionReason,
    RoomGatekeeper,
)
from .live_channels import LiveChannelHub
from .metrics import SessionMetrics
from .presence import PresenceTracker, RoomConnection, RoomOccupancy
from .token_verifier import SavedDocument, TokenVerifier, VerifiedDocument

__all__ = [
    "AccessTokenClaims",
    "AccessTokenService",
    "AuthMethod",
    "AuthorizedConnection",
    "ConnectionParams",
    "ConnectionRejected",
    "CredentialIssuer",
    "EventLog",
    "EventLogEntry",
    "EventType",
    "IssuedDocument",
    "JoinedDocument",
    "LiveChannelHub",
    "PresenceTracker",
    "RejectionReason",
    "RoomConnection",
    "RoomGatekeeper",
    "RoomOccupancy",
    "SavedDocument",
    "SessionMetrics",
    "TokenVerifier",
    "VerifiedDocument",
]
