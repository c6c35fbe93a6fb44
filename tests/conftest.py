"""Pytest configuration shared across the suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from app.clients import SQLiteDocumentStore
from app.services import (
    AccessTokenService,
    CredentialIssuer,
    EventLog,
    PresenceTracker,
    RoomGatekeeper,
    SessionMetrics,
    TokenVerifier,
)


class FrozenClock:
    """Callable clock that tests can move forward explicitly."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def document_store(tmp_path) -> SQLiteDocumentStore:
    return SQLiteDocumentStore(str(tmp_path / "documents.db"))


@pytest.fixture
def token_service(clock) -> AccessTokenService:
    return AccessTokenService(
        secret="unit-test-secret", ttl=timedelta(days=7), clock=clock
    )


@pytest.fixture
def issuer(document_store, token_service) -> CredentialIssuer:
    return CredentialIssuer(
        store=document_store,
        tokens=token_service,
        frontend_base_url="https://docs.example.com/",
    )


@pytest.fixture
def verifier(document_store, token_service) -> TokenVerifier:
    return TokenVerifier(store=document_store, tokens=token_service)


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def presence(event_log) -> PresenceTracker:
    return PresenceTracker(event_log)


@pytest.fixture
def metrics() -> SessionMetrics:
    return SessionMetrics()


@pytest.fixture
def gatekeeper(verifier, issuer, presence, event_log, metrics) -> RoomGatekeeper:
    return RoomGatekeeper(
        verifier=verifier,
        issuer=issuer,
        presence=presence,
        event_log=event_log,
        metrics=metrics,
    )
