"""
Pydantic models for the document credential endpoints.

Request fields are optional at the schema level; presence is enforced by the
service layer so a missing field is answered with 400 rather than 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateDocumentRequest(_CamelModel):
    title: Optional[str] = Field(None, description="Human readable document title.")


class CreateDocumentResponse(_CamelModel):
    message: str = "Document created successfully"
    id: str = Field(..., description="Opaque room identifier.")
    doc_id: int = Field(..., alias="docId")
    pin: int
    join_link: str = Field(..., alias="joinLink")
    token: str


class JoinDocumentRequest(_CamelModel):
    doc_id: Optional[int] = Field(None, alias="docId")
    pin: Optional[int] = None


class JoinDocumentResponse(_CamelModel):
    message: str = "Document ready to join"
    id: str
    title: str
    token: str


class VerifyTokenRequest(_CamelModel):
    token: Optional[str] = None


class VerifyTokenResponse(_CamelModel):
    message: str = "Token valid"
    id: str
    title: str
    doc_id: int = Field(..., alias="docId")


class SaveDocumentRequest(_CamelModel):
    token: Optional[str] = None
    content: Optional[str] = Field(
        None, description="Full document snapshot; replaces stored content."
    )


class SaveDocumentResponse(_CamelModel):
    message: str = "Document saved successfully"
    id: str
    title: str
    saved_at: datetime = Field(..., alias="savedAt")


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
