"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_access_token_service,
    get_credential_issuer,
    get_document_store,
    get_event_log,
    get_live_channel_hub,
    get_presence_tracker,
    get_room_gatekeeper,
    get_session_metrics,
    get_token_verifier,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_access_token_service",
    "get_app_settings",
    "get_credential_issuer",
    "get_document_store",
    "get_event_log",
    "get_live_channel_hub",
    "get_presence_tracker",
    "get_room_gatekeeper",
    "get_session_metrics",
    "get_token_verifier",
]
