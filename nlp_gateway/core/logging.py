"""Process-wide logging for the gateway.

structlog owns the format: gateway events, stdlib records and the ASGI
server's own loggers (uvicorn, gunicorn) all pass through one
``ProcessorFormatter`` on the root handler, so a JSON deployment never mixes
in plain-text lines. Access lines come from ``RequestContextMiddleware``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Loggers the ASGI server configures with its own handlers
SERVER_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "gunicorn",
    "gunicorn.error",
    "gunicorn.access",
)

# Replaced by the middleware's request_completed event
_ACCESS_LOGGERS = ("uvicorn.access", "gunicorn.access")


def setup_logging(
    *,
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "nlp_gateway",
    service_version: str | None = None,
) -> None:
    """Install the structlog pipeline and adopt the server loggers.

    Args:
        log_level: Root log level.
        json_logs: Render JSON (production) instead of coloured console output.
        service_name: Stamped on every line as ``service``.
        service_version: Stamped as ``version`` when given.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        _drop_color_message,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _service_stamp(service_name, service_version),
    ]

    render_chain: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json_logs:
        render_chain += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=render_chain,
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(
            logging.WARNING if name in _ACCESS_LOGGERS else log_level.upper()
        )

    # Per-request httpx lines duplicate upstream_request
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def _drop_color_message(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    # uvicorn passes an ANSI-coloured copy of the message as an extra
    event_dict.pop("color_message", None)
    return event_dict


def _service_stamp(
    service_name: str, service_version: str | None
) -> structlog.types.Processor:
    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["service"] = service_name
        if service_version:
            event_dict["version"] = service_version
        return event_dict

    return processor
