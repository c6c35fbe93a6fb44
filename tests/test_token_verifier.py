from __future__ import annotations

from datetime import timedelta

import pytest

from app.core.errors import (
    DocumentNotFoundError,
    InvalidInputError,
    UnauthorizedError,
)


def test_verify_round_trips_created_token(issuer, verifier) -> None:
    issued = issuer.create_document("Notes")

    verified = verifier.verify(issued.token)

    assert verified.room_id == issued.room_id
    assert verified.title == "Notes"
    assert verified.doc_id == issued.doc_id


def test_verify_round_trips_joined_token(issuer, verifier) -> None:
    issued = issuer.create_document("Notes")
    joined = issuer.join_by_credentials(issued.doc_id, issued.pin)

    verified = verifier.verify(joined.token)

    assert verified.room_id == issued.room_id
    assert verified.title == "Notes"


def test_verify_requires_token(verifier) -> None:
    with pytest.raises(InvalidInputError):
        verifier.verify("")


def test_verify_rejects_expired_token(issuer, verifier, clock) -> None:
    issued = issuer.create_document("Notes")
    clock.advance(timedelta(days=8))

    with pytest.raises(UnauthorizedError):
        verifier.verify(issued.token)


def test_verify_rejects_tampered_token(issuer, verifier) -> None:
    issued = issuer.create_document("Notes")

    with pytest.raises(UnauthorizedError):
        verifier.verify(issued.token[:-6] + "xxxxxx")


def test_verify_reports_deleted_document(issuer, verifier, document_store) -> None:
    issued = issuer.create_document("Notes")
    assert document_store.delete_document(issued.room_id)

    with pytest.raises(DocumentNotFoundError):
        verifier.verify(issued.token)


def test_apply_content_overwrites_snapshot(issuer, verifier, document_store) -> None:
    issued = issuer.create_document("Notes")

    verifier.apply_content(issued.token, "first draft")
    saved = verifier.apply_content(issued.token, "second draft")

    assert saved.room_id == issued.room_id
    assert saved.title == "Notes"
    assert document_store.get_document(issued.room_id).content == "second draft"
    assert saved.saved_at.tzinfo is not None


def test_apply_content_treats_missing_content_as_empty(issuer, verifier, document_store) -> None:
    issued = issuer.create_document("Notes")
    verifier.apply_content(issued.token, "draft")

    verifier.apply_content(issued.token, None)

    assert document_store.get_document(issued.room_id).content == ""


def test_apply_content_rejects_invalid_token(verifier) -> None:
    with pytest.raises(UnauthorizedError):
        verifier.apply_content("bogus", "content")
