"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Process-wide state (presence registry, event log, relay hub, metrics) is
created once here and handed to whoever needs it; tests swap these factories
through ``app.dependency_overrides``.
"""

from datetime import timedelta
from functools import lru_cache

from app.clients import SQLiteDocumentStore
from app.core.config import get_settings
from app.services import (
    AccessTokenService,
    CredentialIssuer,
    EventLog,
    LiveChannelHub,
    PresenceTracker,
    RoomGatekeeper,
    SessionMetrics,
    TokenVerifier,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_document_store() -> SQLiteDocumentStore:
    """Provide the shared document store."""
    settings = _settings()
    return SQLiteDocumentStore(settings.storage.document_db_path)


@lru_cache()
def get_access_token_service() -> AccessTokenService:
    """Provide the token sealer keyed by the configured secret."""
    settings = _settings()
    return AccessTokenService(
        secret=settings.security.token_signing_secret,
        ttl=timedelta(days=settings.security.access_token_ttl_days),
    )


def get_credential_issuer() -> CredentialIssuer:
    """Build a credential issuer over the shared store and token sealer."""
    settings = _settings()
    return CredentialIssuer(
        store=get_document_store(),
        tokens=get_access_token_service(),
        frontend_base_url=str(settings.frontend_base_url),
    )


def get_token_verifier() -> TokenVerifier:
    """Build a token verifier over the shared store and token sealer."""
    return TokenVerifier(
        store=get_document_store(), tokens=get_access_token_service()
    )


@lru_cache()
def get_event_log() -> EventLog:
    """Provide the process-wide bounded event log."""
    return EventLog()


@lru_cache()
def get_presence_tracker() -> PresenceTracker:
    """Provide the process-wide room presence registry."""
    return PresenceTracker(get_event_log())


@lru_cache()
def get_session_metrics() -> SessionMetrics:
    """Provide process-wide request and authorization counters."""
    return SessionMetrics()


@lru_cache()
def get_live_channel_hub() -> LiveChannelHub:
    """Provide the socket fan-out hub."""
    return LiveChannelHub()


@lru_cache()
def get_room_gatekeeper() -> RoomGatekeeper:
    """Provide the live-connection gatekeeper."""
    return RoomGatekeeper(
        verifier=get_token_verifier(),
        issuer=get_credential_issuer(),
        presence=get_presence_tracker(),
        event_log=get_event_log(),
        metrics=get_session_metrics(),
    )


__all__ = [
    "get_access_token_service",
    "get_credential_issuer",
    "get_document_store",
    "get_event_log",
    "get_live_channel_hub",
    "get_presence_tracker",
    "get_room_gatekeeper",
    "get_session_metrics",
    "get_token_verifier",
]
