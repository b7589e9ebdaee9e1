"""NLP Gateway — FastAPI application factory.

Forwards NLP requests to the rake, prose and lang upstreams and stores
records in Redis.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nlp_gateway import __version__
from nlp_gateway.core.config import settings
from nlp_gateway.core.errors import register_error_handlers
from nlp_gateway.core.events import lifespan
from nlp_gateway.core.logging import setup_logging
from nlp_gateway.core.middleware import RequestContextMiddleware
from nlp_gateway.routers import health, nlp, record, routes


def create_app() -> FastAPI:
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.service_name,
        service_version=__version__,
    )

    application = FastAPI(
        title="NLP Gateway",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestContextMiddleware)

    register_error_handlers(application)

    application.include_router(health.router)
    application.include_router(routes.router)
    application.include_router(nlp.router)
    application.include_router(record.router)

    return application


app = create_app()
