"""
Domain models for shared document records.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentRecord(BaseModel):
    """Represents a document row held by the document store."""

    room_id: str = Field(..., description="Opaque identifier naming the live room.")
    doc_id: int = Field(..., description="Public numeric code shared with joiners.")
    pin: int = Field(..., description="Secret numeric code paired with doc_id.")
    title: str
    content: str = ""
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


__all__ = ["DocumentRecord"]
