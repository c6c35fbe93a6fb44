"""Public schema exports."""

from .documents import (
    CreateDocumentRequest,
    CreateDocumentResponse,
    JoinDocumentRequest,
    JoinDocumentResponse,
    SaveDocumentRequest,
    SaveDocumentResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)

__all__ = [
    "CreateDocumentRequest",
    "CreateDocumentResponse",
    "JoinDocumentRequest",
    "JoinDocumentResponse",
    "SaveDocumentRequest",
    "SaveDocumentResponse",
    "VerifyTokenRequest",
    "VerifyTokenResponse",
]
