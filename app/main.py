"""
FastAPI application entrypoint for the shared document session service.
"""

from __future__ import annotations

import time
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.live import router as live_router
from app.api.routes import router as api_router
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.dependencies import get_session_metrics


async def _invalid_request_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed bodies with 400 like any other missing field."""
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": "Invalid request body.", "errors": jsonable_encoder(exc.errors())},
    )


async def _record_request_metrics(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    route = request.scope.get("route")
    route_path = getattr(route, "path", request.url.path)
    request.app.state.session_metrics.observe_request(
        method=request.method,
        route=route_path,
        status_code=response.status_code,
        duration_ms=duration_ms,
    )
    return response


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Shared Document Session Service",
        version="0.1.0",
        description=(
            "Credential exchange, token verification and live-room presence "
            "for account-free shared documents."
        ),
    )
    app.state.started_at = time.monotonic()
    app.state.session_metrics = get_session_metrics()
    app.add_exception_handler(RequestValidationError, _invalid_request_handler)
    app.middleware("http")(_record_request_metrics)
    app.include_router(api_router, prefix="/api")
    app.include_router(live_router, prefix="/live")
    return app


app = create_app()

__all__ = ["app", "create_app"]
