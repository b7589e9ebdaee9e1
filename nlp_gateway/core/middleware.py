"""Per-request context and access logging.

Every request gets an ``X-Request-ID`` and an ``X-Correlation-ID``; both are
bound into structlog context and echoed back. The correlation ID also sits on
``request.state`` so the upstream client forwards it. One
``request_completed`` event per request replaces the server's access log.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"
REQUEST_HEADER = "X-Request-ID"

logger = structlog.get_logger()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request/correlation IDs and logs one access event per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_HEADER) or uuid.uuid4().hex
        correlation_id = request.headers.get(CORRELATION_HEADER) or request_id
        request.state.correlation_id = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            logger.error("request_failed", status_code=500, duration_ms=_elapsed_ms(started))
            raise

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            client=request.client.host if request.client else None,
        )

        response.headers[REQUEST_HEADER] = request_id
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
