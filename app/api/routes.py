"""
FastAPI routes for document creation and credential exchange.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import AppSettings
from app.core.errors import InternalServiceError, SessionAccessError
from app.dependencies import (
    SettingsDependency,
    get_credential_issuer,
    get_token_verifier,
)
from app.schemas import (
    CreateDocumentRequest,
    CreateDocumentResponse,
    JoinDocumentRequest,
    JoinDocumentResponse,
    SaveDocumentRequest,
    SaveDocumentResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error."


def _http_error(exc: SessionAccessError, action: str) -> HTTPException:
    """Translate a service failure into a client-facing HTTP error."""
    if isinstance(exc, InternalServiceError):
        logger.exception("Error %s", action)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_DETAIL
        )
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettings = SettingsDependency) -> dict:
    """Simple health endpoint for monitoring."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post(
    "/docs/create",
    response_model=CreateDocumentResponse,
    status_code=HTTPStatus.CREATED,
)
async def create_document(
    payload: CreateDocumentRequest,
    issuer: Annotated[Any, Depends(get_credential_issuer)],
) -> CreateDocumentResponse:
    """Create an empty document and hand back its credentials and token."""
    try:
        issued = await asyncio.to_thread(issuer.create_document, payload.title)
    except SessionAccessError as exc:
        raise _http_error(exc, "creating document") from exc

    return CreateDocumentResponse(
        id=issued.room_id,
        doc_id=issued.doc_id,
        pin=issued.pin,
        join_link=issued.join_link,
        token=issued.token,
    )


@router.post("/docs/join", response_model=JoinDocumentResponse)
async def join_document(
    payload: JoinDocumentRequest,
    issuer: Annotated[Any, Depends(get_credential_issuer)],
) -> JoinDocumentResponse:
    """Exchange a docId/pin pair for the room identity and a fresh token."""
    try:
        joined = await asyncio.to_thread(
            issuer.join_by_credentials, payload.doc_id, payload.pin
        )
    except SessionAccessError as exc:
        raise _http_error(exc, "joining document") from exc

    return JoinDocumentResponse(id=joined.room_id, title=joined.title, token=joined.token)


@router.post("/docs/verify-token", response_model=VerifyTokenResponse)
async def verify_token(
    payload: VerifyTokenRequest,
    verifier: Annotated[Any, Depends(get_token_verifier)],
) -> VerifyTokenResponse:
    """Check a token and confirm its document still exists."""
    try:
        verified = await asyncio.to_thread(verifier.verify, payload.token)
    except SessionAccessError as exc:
        raise _http_error(exc, "verifying token") from exc

    return VerifyTokenResponse(
        id=verified.room_id, title=verified.title, doc_id=verified.doc_id
    )


@router.post("/docs/save", response_model=SaveDocumentResponse)
async def save_document(
    payload: SaveDocumentRequest,
    verifier: Annotated[Any, Depends(get_token_verifier)],
) -> SaveDocumentResponse:
    """Replace the stored snapshot of a document."""
    try:
        saved = await asyncio.to_thread(
            verifier.apply_content, payload.token, payload.content
        )
    except SessionAccessError as exc:
        raise _http_error(exc, "saving document") from exc

    return SaveDocumentResponse(
        id=saved.room_id, title=saved.title, saved_at=saved.saved_at
    )


__all__ = ["router"]
