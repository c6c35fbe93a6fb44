"""Verification of access tokens against the document store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.clients import SQLiteDocumentStore
from app.core.errors import DocumentNotFoundError, InvalidInputError
from app.services.access_tokens import AccessTokenService


@dataclass(frozen=True, slots=True)
class VerifiedDocument:
    room_id: str
    title: str
    doc_id: int


@dataclass(frozen=True, slots=True)
class SavedDocument:
    room_id: str
    title: str
    saved_at: datetime


class TokenVerifier:
    """Check token integrity and expiry, then confirm the document still exists."""

    def __init__(self, *, store: SQLiteDocumentStore, tokens: AccessTokenService) -> None:
        self._store = store
        self._tokens = tokens

    def verify(self, token: Optional[str]) -> VerifiedDocument:
        if not token:
            raise InvalidInputError("Missing token.")
        claims = self._tokens.decode(token)

        # Tokens may outlive the document they point at.
        document = self._store.get_document(claims.room_id)
        if document is None:
            raise DocumentNotFoundError("Document not found.")
        return VerifiedDocument(
            room_id=document.room_id, title=document.title, doc_id=document.doc_id
        )

    def apply_content(self, token: Optional[str], content: Optional[str]) -> SavedDocument:
        """Overwrite the stored snapshot; the last writer wins."""
        verified = self.verify(token)
        document = self._store.update_content(verified.room_id, content or "")
        if document is None:
            raise DocumentNotFoundError("Document not found.")
        return SavedDocument(
            room_id=document.room_id,
            title=document.title,
            saved_at=document.updated_at,
        )


__all__ = ["SavedDocument", "TokenVerifier", "VerifiedDocument"]
