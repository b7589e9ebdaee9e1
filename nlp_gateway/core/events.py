"""Application lifespan (startup / shutdown hooks) and the resources it owns."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request

from nlp_gateway.core.config import settings
from nlp_gateway.services.record_store import RecordStore
from nlp_gateway.services.upstream import create_http_client

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared HTTP client and record store; close them on shutdown."""
    log.info(
        "nlp_gateway starting up",
        upstreams=settings.upstreams,
        api_key_required=bool(settings.api_key),
    )

    app.state.http_client = create_http_client()
    app.state.record_store = RecordStore.from_settings()
    # Unreachable Redis is not fatal at startup; /record reports it per request
    await app.state.record_store.ping()

    yield

    log.info("nlp_gateway shutting down")
    await app.state.http_client.aclose()
    await app.state.record_store.close()


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store
