"""API key check for the passthrough and record endpoints."""

from __future__ import annotations

import secrets

from fastapi import Security, status
from fastapi.security import APIKeyHeader

from nlp_gateway.core.config import settings
from nlp_gateway.core.errors import GatewayError

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


async def require_api_key(api_key: str | None = Security(api_key_header)) -> None:
    """FastAPI dependency — reject the request unless it carries the configured key.

    The check is disabled when no ``API_KEY`` is configured.
    """
    if not settings.api_key:
        return
    # Starlette decodes header bytes as latin-1; compare the raw bytes
    if not api_key or not secrets.compare_digest(
        api_key.encode("latin-1"), settings.api_key.encode("utf-8")
    ):
        raise GatewayError(status.HTTP_401_UNAUTHORIZED)
