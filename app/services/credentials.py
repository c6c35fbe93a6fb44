"""
Document creation and docId/pin credential exchange.
"""

from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from app.clients import SQLiteDocumentStore
from app.core.errors import DocumentNotFoundError, InvalidInputError
from app.models import DocumentRecord
from app.services.access_tokens import AccessTokenService

logger = logging.getLogger(__name__)

DOC_ID_MIN = 100_000_000
DOC_ID_MAX = 999_999_999
PIN_MIN = 1_000
PIN_MAX = 9_999


@dataclass(frozen=True, slots=True)
class IssuedDocument:
    room_id: str
    doc_id: int
    pin: int
    title: str
    join_link: str
    token: str


@dataclass(frozen=True, slots=True)
class JoinedDocument:
    room_id: str
    title: str
    token: str


def generate_doc_id() -> int:
    """Return a random 9-digit public document code."""
    return DOC_ID_MIN + secrets.randbelow(DOC_ID_MAX - DOC_ID_MIN + 1)


def generate_pin() -> int:
    """Return a random 4-digit secret pin."""
    return PIN_MIN + secrets.randbelow(PIN_MAX - PIN_MIN + 1)


def _coerce_code(value: Any, field_name: str) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInputError("Missing document ID or pin.")
    try:
        code = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{field_name} must be numeric.") from exc
    if code <= 0:
        raise InvalidInputError("Missing document ID or pin.")
    return code


class CredentialIssuer:
    """Create documents and exchange docId/pin pairs for access tokens."""

    def __init__(
        self,
        *,
        store: SQLiteDocumentStore,
        tokens: AccessTokenService,
        frontend_base_url: str,
    ) -> None:
        self._store = store
        self._tokens = tokens
        self._frontend_base_url = str(frontend_base_url).rstrip("/")

    def create_document(self, title: Optional[str]) -> IssuedDocument:
        """Persist an empty document and return its credentials and token."""
        if title is None or not title.strip():
            raise InvalidInputError("Missing title.")

        # TODO: retry on a colliding doc_id/pin pair once the store enforces uniqueness.
        record = DocumentRecord(
            room_id=uuid.uuid4().hex,
            doc_id=generate_doc_id(),
            pin=generate_pin(),
            title=title,
            content="",
        )
        record = self._store.create_document(record)
        token = self._tokens.issue(record)
        logger.info("Created document room=%s docId=%s", record.room_id, record.doc_id)

        return IssuedDocument(
            room_id=record.room_id,
            doc_id=record.doc_id,
            pin=record.pin,
            title=record.title,
            join_link=self.build_join_link(record.doc_id),
            token=token,
        )

    def resolve_credentials(self, doc_id: Any, pin: Any) -> DocumentRecord:
        """Return the single document matching ``doc_id`` and ``pin``.

        Both the join endpoint and the live-connection credential path go
        through here. Zero matches and ambiguous matches are reported the
        same way so callers learn nothing about which part was wrong.
        """
        doc_code = _coerce_code(doc_id, "docId")
        pin_code = _coerce_code(pin, "pin")

        matches = self._store.find_by_credentials(doc_id=doc_code, pin=pin_code)
        if len(matches) != 1:
            if len(matches) > 1:
                logger.warning(
                    "Ambiguous credentials docId=%s matched %d documents",
                    doc_code,
                    len(matches),
                )
            raise DocumentNotFoundError("Document not found.")
        return matches[0]

    def join_by_credentials(self, doc_id: Any, pin: Any) -> JoinedDocument:
        """Exchange a docId/pin pair for the room identity and a fresh token."""
        record = self.resolve_credentials(doc_id, pin)
        token = self._tokens.issue(record)
        logger.info("Issued join token room=%s docId=%s", record.room_id, record.doc_id)
        return JoinedDocument(room_id=record.room_id, title=record.title, token=token)

    def build_join_link(self, doc_id: int) -> str:
        return f"{self._frontend_base_url}/join?docId={doc_id}"


__all__ = [
    "CredentialIssuer",
    "IssuedDocument",
    "JoinedDocument",
    "generate_doc_id",
    "generate_pin",
]
