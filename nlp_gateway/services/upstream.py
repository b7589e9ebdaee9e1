"""Upstream NLP client — forwards requests and maps failures to ``GatewayError``."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import structlog

from nlp_gateway.core.auth import API_KEY_HEADER
from nlp_gateway.core.config import settings
from nlp_gateway.core.errors import GatewayError, reason_phrase
from nlp_gateway.core.middleware import CORRELATION_HEADER

logger = structlog.get_logger()


# Hop-by-hop headers, and headers the gateway sets itself on the way out.
# httpx has already decoded the body, so its length and encoding no longer hold.
UNRELAYED_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
        "content-length",
        "content-encoding",
        "date",
        "server",
        "x-request-id",
        "x-correlation-id",
    }
)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    content: bytes
    content_type: str
    headers: dict[str, str] = field(default_factory=dict)


def relay_headers(headers: httpx.Headers) -> dict[str, str]:
    """Upstream response headers that are safe to pass back to the caller."""
    return {
        name: value
        for name, value in headers.items()
        if name.lower() not in UNRELAYED_HEADERS
    }


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.upstream_timeout)


def upstream_url(name: str) -> str:
    """Return the base URL of a named upstream."""
    try:
        return settings.upstreams[name]
    except KeyError:
        raise GatewayError(404, f"Unknown upstream: {name}") from None


def _error_message(response: httpx.Response) -> str:
    """Pull a message out of an upstream error body."""
    if response.headers.get("content-type", "").startswith("application/json"):
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            for field in ("message", "detail", "error"):
                if isinstance(data.get(field), str):
                    return data[field]
    text = response.text.strip()
    return text or reason_phrase(response.status_code)


async def forward(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    content: bytes | None = None,
    content_type: str | None = None,
    correlation_id: str | None = None,
) -> UpstreamResponse:
    """Send a request to an upstream and relay its response.

    The body is sent as-is. Connection failures surface as 500, upstream
    non-2xx responses keep their status code.
    """
    # Inbound header values arrive latin-1 decoded; send them back as bytes
    headers: dict[str, bytes] = {}
    if content_type:
        headers["Content-Type"] = content_type.encode("latin-1")
    if settings.outbound_api_key:
        headers[API_KEY_HEADER] = settings.outbound_api_key.encode("utf-8")
    if correlation_id:
        headers[CORRELATION_HEADER] = correlation_id.encode("latin-1")

    logger.info("upstream_request", upstream_method=method, url=url)
    try:
        response = await client.request(method, url, content=content, headers=headers)
    except httpx.RequestError as exc:
        logger.warning("upstream_request_failed", upstream_method=method, url=url, error=str(exc))
        raise GatewayError(500, f'{method.title()} "{url}": {exc}') from exc

    if response.status_code >= 400:
        logger.warning(
            "upstream_error_response",
            upstream_method=method,
            url=url,
            status_code=response.status_code,
        )
        raise GatewayError(response.status_code, _error_message(response))

    return UpstreamResponse(
        status_code=response.status_code,
        content=response.content,
        content_type=response.headers.get("content-type", "application/json"),
        headers=relay_headers(response.headers),
    )


async def check_health(
    client: httpx.AsyncClient,
    name: str,
    *,
    correlation_id: str | None = None,
) -> UpstreamResponse:
    """Relay the ``/health`` response of a named upstream."""
    url = f"{upstream_url(name)}/health"
    return await forward(client, "GET", url, correlation_id=correlation_id)
