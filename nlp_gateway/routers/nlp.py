"""NLP passthrough routes — forward the request body to the owning upstream."""

from __future__ import annotations

import httpx
import structlog
from fastapi import APIRouter, Depends, Request, Response

from nlp_gateway.core.auth import require_api_key
from nlp_gateway.core.events import get_http_client
from nlp_gateway.services.upstream import forward, upstream_url

router = APIRouter(tags=["NLP"], dependencies=[Depends(require_api_key)])
logger = structlog.get_logger()


async def _passthrough(
    request: Request, client: httpx.AsyncClient, upstream: str, path: str
) -> Response:
    """Forward the inbound body unmodified and relay the upstream's answer."""
    body = await request.body()
    url = f"{upstream_url(upstream)}{path}"
    logger.info("nlp_passthrough", upstream=upstream, bytes=len(body))

    result = await forward(
        client,
        "POST",
        url,
        content=body,
        content_type=request.headers.get("content-type", "application/json"),
        correlation_id=getattr(request.state, "correlation_id", None),
    )
    return Response(
        content=result.content,
        status_code=result.status_code,
        headers=result.headers,
        media_type=result.content_type,
    )


@router.post("/keywords")
async def get_keywords(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    """Keyword extraction (rake)."""
    return await _passthrough(request, client, "rake", "/keywords")


@router.post("/tokens")
async def get_tokens(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    return await _passthrough(request, client, "prose", "/tokens")


@router.post("/entities")
async def get_entities(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    return await _passthrough(request, client, "prose", "/entities")


@router.post("/sentences")
async def get_sentences(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    return await _passthrough(request, client, "prose", "/sentences")


@router.post("/language")
async def get_language(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
) -> Response:
    """Language detection (lang)."""
    return await _passthrough(request, client, "lang", "/language")
