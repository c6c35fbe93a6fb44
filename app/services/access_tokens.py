"""Issue and open sealed document access tokens."""

from __future__ import annotations

import base64
import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

from cryptography.fernet import Fernet, InvalidToken

from app.core.errors import UnauthorizedError
from app.models import DocumentRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    """Claims carried by an access token."""

    room_id: str
    doc_id: int
    pin: int
    title: str
    issued_at: datetime
    expires_at: datetime

    def to_payload(self) -> Dict[str, Any]:
        return {
            "room_id": self.room_id,
            "doc_id": self.doc_id,
            "pin": self.pin,
            "title": self.title,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AccessTokenClaims":
        return cls(
            room_id=str(payload["room_id"]),
            doc_id=int(payload["doc_id"]),
            pin=int(payload["pin"]),
            title=str(payload["title"]),
            issued_at=datetime.fromisoformat(payload["issued_at"]),
            expires_at=datetime.fromisoformat(payload["expires_at"]),
        )


class AccessTokenService:
    """Seal claims with a Fernet key derived from the server secret.

    Tokens are authenticated and encrypted, so clients can neither read the
    embedded pin nor alter the room they point at. Expiry is checked against
    the ``expires_at`` claim rather than Fernet's own timestamp so the token
    lifetime is explicit in the payload.
    """

    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest)
        self._fernet = Fernet(key)
        self._ttl = ttl
        self._clock = clock

    def issue(self, document: DocumentRecord) -> str:
        """Mint a token for the given document."""
        issued_at = self._clock()
        claims = AccessTokenClaims(
            room_id=document.room_id,
            doc_id=document.doc_id,
            pin=document.pin,
            title=document.title,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
        )
        serialized = json.dumps(claims.to_payload(), separators=(",", ":"))
        token = self._fernet.encrypt(serialized.encode("utf-8"))
        return token.decode("utf-8")

    def decode(self, token: str) -> AccessTokenClaims:
        """Open a token, raising ``UnauthorizedError`` if it is unusable."""
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
        except (InvalidToken, UnicodeEncodeError) as exc:
            raise UnauthorizedError("Invalid or expired token.") from exc

        try:
            claims = AccessTokenClaims.from_payload(json.loads(plaintext))
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedError("Invalid or expired token.") from exc

        expires_at = claims.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if self._clock() >= expires_at:
            raise UnauthorizedError("Invalid or expired token.")
        return claims


__all__ = ["AccessTokenClaims", "AccessTokenService"]
