"""Gateway error type and the exception handlers that render it.

Every error leaves the gateway as ``{"code": <status>, "message": <str>}``.
"""

from __future__ import annotations

from http import HTTPStatus

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


def reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


class GatewayError(Exception):
    """An error relayed to the caller as an HTTP status plus message."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        self.message = message or reason_phrase(status_code)
        super().__init__(f"code={self.status_code}, message={self.message}")


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"code": status_code, "message": message},
        headers=headers,
    )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("gateway_error", code=exc.status_code, message=exc.message)
    else:
        logger.info("gateway_error", code=exc.status_code, message=exc.message)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Starlette fills detail with the reason phrase when none was given
    message = exc.detail if isinstance(exc.detail, str) else reason_phrase(exc.status_code)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Unprocessable Entity") if errors else "Unprocessable Entity"
    return error_response(422, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return error_response(500, reason_phrase(500))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
