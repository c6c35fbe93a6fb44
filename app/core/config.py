"""
Application configuration models and helpers.

Centralizes settings management so the REST boundary and the live-session
layer share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path

import os

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class SecuritySettings(BaseSettings):
    """Secrets and lifetimes for access tokens."""

    token_signing_secret: str = Field(
        ...,
        validation_alias="TOKEN_SIGNING_SECRET",
        description="Server-held secret used to seal document access tokens.",
    )
    access_token_ttl_days: int = Field(
        7,
        validation_alias="ACCESS_TOKEN_TTL_DAYS",
        description="Lifetime of issued access tokens, in days.",
    )

    @field_validator("token_signing_secret")
    @classmethod
    def _reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("TOKEN_SIGNING_SECRET must not be blank.")
        return value


class StorageSettings(BaseSettings):
    """Where document records are persisted."""

    document_db_path: str = Field(
        "data/documents.db", validation_alias="DOCUMENT_DB_PATH"
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    frontend_base_url: HttpUrl = Field(
        "http://localhost:3000",
        validation_alias="FRONTEND_BASE_URL",
        description="Base URL used to build shareable join links.",
    )
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "SecuritySettings",
    "StorageSettings",
    "get_settings",
]
