from __future__ import annotations

import uuid

import pytest

from app.core.errors import DocumentNotFoundError, InvalidInputError
from app.models import DocumentRecord
from app.services import credentials


def test_create_document_persists_empty_document(issuer, document_store) -> None:
    issued = issuer.create_document("Notes")

    stored = document_store.get_document(issued.room_id)
    assert stored is not None
    assert stored.title == "Notes"
    assert stored.content == ""
    assert stored.doc_id == issued.doc_id
    assert stored.pin == issued.pin
    assert 100_000_000 <= issued.doc_id <= 999_999_999
    assert 1_000 <= issued.pin <= 9_999
    uuid.UUID(hex=issued.room_id)


def test_create_document_builds_join_link(issuer) -> None:
    issued = issuer.create_document("Notes")

    assert issued.join_link == f"https://docs.example.com/join?docId={issued.doc_id}"


def test_created_token_round_trips(issuer, token_service) -> None:
    issued = issuer.create_document("Notes")

    claims = token_service.decode(issued.token)
    assert claims.room_id == issued.room_id
    assert claims.title == "Notes"
    assert claims.pin == issued.pin


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_document_requires_title(issuer, title) -> None:
    with pytest.raises(InvalidInputError):
        issuer.create_document(title)


def test_join_resolves_same_room(issuer) -> None:
    issued = issuer.create_document("Notes")

    joined = issuer.join_by_credentials(issued.doc_id, issued.pin)

    assert joined.room_id == issued.room_id
    assert joined.title == "Notes"
    assert joined.token


def test_join_accepts_numeric_strings(issuer) -> None:
    issued = issuer.create_document("Notes")

    joined = issuer.join_by_credentials(str(issued.doc_id), str(issued.pin))

    assert joined.room_id == issued.room_id


def test_join_with_wrong_pin_is_not_found(issuer) -> None:
    issued = issuer.create_document("Notes")
    wrong_pin = 1000 if issued.pin != 1000 else 1001

    with pytest.raises(DocumentNotFoundError):
        issuer.join_by_credentials(issued.doc_id, wrong_pin)


@pytest.mark.parametrize(
    "doc_id, pin", [(None, 4821), (123456789, None), ("", ""), (0, 0)]
)
def test_join_requires_both_fields(issuer, doc_id, pin) -> None:
    with pytest.raises(InvalidInputError):
        issuer.join_by_credentials(doc_id, pin)


def test_join_rejects_non_numeric_codes(issuer) -> None:
    with pytest.raises(InvalidInputError):
        issuer.join_by_credentials("abc", "4821")


def test_ambiguous_credentials_are_not_found(issuer, document_store) -> None:
    for _ in range(2):
        document_store.create_document(
            DocumentRecord(
                room_id=uuid.uuid4().hex, doc_id=111111111, pin=2222, title="Dup"
            )
        )

    with pytest.raises(DocumentNotFoundError):
        issuer.resolve_credentials(111111111, 2222)


def test_generated_codes_use_fixed_widths(monkeypatch) -> None:
    draws = iter([0, 899_999_999, 0, 8_999])
    monkeypatch.setattr(credentials.secrets, "randbelow", lambda _: next(draws))

    assert credentials.generate_doc_id() == 100_000_000
    assert credentials.generate_doc_id() == 999_999_999
    assert credentials.generate_pin() == 1_000
    assert credentials.generate_pin() == 9_999
