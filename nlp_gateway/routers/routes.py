"""Introspection endpoints — the route table and a deliberate error."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute
from pydantic import BaseModel

from nlp_gateway.core.errors import GatewayError

router = APIRouter(tags=["meta"])


class RouteInfo(BaseModel):
    method: str
    path: str
    name: str


def list_routes(routes: list) -> list[RouteInfo]:
    """One entry per method of every API route, named ``module.function``."""
    infos: list[RouteInfo] = []
    for route in routes:
        if not isinstance(route, APIRoute):
            continue
        handler = f"{route.endpoint.__module__}.{route.endpoint.__name__}"
        for method in sorted(route.methods):
            infos.append(RouteInfo(method=method, path=route.path, name=handler))
    return infos


@router.get("/routes", response_model=list[RouteInfo])
async def get_routes(request: Request) -> list[RouteInfo]:
    return list_routes(request.app.routes)


@router.get("/error")
async def get_error() -> None:
    """Always fails; used to exercise error handling end to end."""
    raise GatewayError(500)
