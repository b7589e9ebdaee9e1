"""Health endpoints — the gateway itself and its upstreams."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request, Response

from nlp_gateway.core.events import get_http_client
from nlp_gateway.services.upstream import check_health

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Gateway liveness")
async def get_health() -> dict[str, str]:
    return {"status": "Up"}


@router.get("/{app}", summary="Upstream health")
async def get_health_upstream(
    app: str,
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """Relay the health of a named upstream (``rake``, ``prose`` or ``lang``)."""
    upstream = await check_health(
        client, app, correlation_id=getattr(request.state, "correlation_id", None)
    )
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=upstream.headers,
        media_type=upstream.content_type,
    )
