"""
Error taxonomy shared by the credential, token and live-session layers.

Each error carries the HTTP status it maps to at the REST boundary so routes
can translate failures without re-deciding their class.
"""

from __future__ import annotations

from http import HTTPStatus


class SessionAccessError(Exception):
    """Base class for failures surfaced to clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SessionAccessError):
    """Raised when required fields are missing or malformed."""

    status_code = HTTPStatus.BAD_REQUEST


class DocumentNotFoundError(SessionAccessError):
    """Raised when credentials or a token resolve to no live document."""

    status_code = HTTPStatus.NOT_FOUND


class UnauthorizedError(SessionAccessError):
    """Raised for tampered, expired or otherwise unusable access tokens."""

    status_code = HTTPStatus.UNAUTHORIZED


class InternalServiceError(SessionAccessError):
    """Raised when the store or the token sealer fails unexpectedly."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR


class DocumentStoreError(InternalServiceError):
    """Raised when the document store cannot complete an operation."""


__all__ = [
    "DocumentNotFoundError",
    "DocumentStoreError",
    "InternalServiceError",
    "InvalidInputError",
    "SessionAccessError",
    "UnauthorizedError",
]
