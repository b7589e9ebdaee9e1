"""Tests for /health, /health/{app}, /routes and /error."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from respx import MockRouter

from nlp_gateway.core.config import settings


@pytest.mark.asyncio
async def test_health_reports_up(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "Up"}


@pytest.mark.asyncio
async def test_health_echoes_request_ids(client: AsyncClient):
    response = await client.get("/health", headers={"X-Correlation-ID": "corr-123"})

    assert response.headers["X-Correlation-ID"] == "corr-123"
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_upstream_health_is_relayed(client: AsyncClient, respx_mock: MockRouter):
    route = respx_mock.get(f"{settings.upstreams['prose']}/health").mock(
        return_value=httpx.Response(200, json={"status": "Up"})
    )

    response = await client.get("/health/prose")

    assert response.status_code == 200
    assert response.json() == {"status": "Up"}
    assert route.called


@pytest.mark.asyncio
async def test_upstream_health_relays_method_not_allowed(
    client: AsyncClient, respx_mock: MockRouter
):
    respx_mock.get(f"{settings.upstreams['rake']}/health").mock(
        return_value=httpx.Response(405, text="Method Not Allowed")
    )

    response = await client.get("/health/rake")

    assert response.status_code == 405
    assert response.json() == {"code": 405, "message": "Method Not Allowed"}


@pytest.mark.asyncio
async def test_upstream_health_unreachable_is_500(client: AsyncClient, respx_mock: MockRouter):
    url = f"{settings.upstreams['lang']}/health"
    respx_mock.get(url).mock(side_effect=httpx.ConnectError("connection refused"))

    response = await client.get("/health/lang")

    assert response.status_code == 500
    assert response.json()["message"] == f'Get "{url}": connection refused'


@pytest.mark.asyncio
async def test_unknown_upstream_is_404(client: AsyncClient):
    response = await client.get("/health/nope")

    assert response.status_code == 404
    assert response.json() == {"code": 404, "message": "Unknown upstream: nope"}


@pytest.mark.asyncio
async def test_disallowed_method_on_upstream_health_is_405(client: AsyncClient):
    response = await client.post("/health/rake")

    assert response.status_code == 405
    assert response.json() == {"code": 405, "message": "Method Not Allowed"}


@pytest.mark.asyncio
async def test_unknown_path_is_404(client: AsyncClient):
    response = await client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"code": 404, "message": "Not Found"}


@pytest.mark.asyncio
async def test_error_endpoint_always_fails(client: AsyncClient):
    response = await client.get("/error")

    assert response.status_code == 500
    assert response.json() == {"code": 500, "message": "Internal Server Error"}


@pytest.mark.asyncio
async def test_routes_lists_registered_handlers(client: AsyncClient):
    response = await client.get("/routes")

    assert response.status_code == 200

    prefix = "nlp_gateway.routers"
    expected = [
        {"method": "GET", "path": "/health", "name": f"{prefix}.health.get_health"},
        {"method": "GET", "path": "/health/{app}", "name": f"{prefix}.health.get_health_upstream"},
        {"method": "GET", "path": "/error", "name": f"{prefix}.routes.get_error"},
        {"method": "GET", "path": "/routes", "name": f"{prefix}.routes.get_routes"},
        {"method": "POST", "path": "/keywords", "name": f"{prefix}.nlp.get_keywords"},
        {"method": "POST", "path": "/tokens", "name": f"{prefix}.nlp.get_tokens"},
        {"method": "POST", "path": "/entities", "name": f"{prefix}.nlp.get_entities"},
        {"method": "POST", "path": "/sentences", "name": f"{prefix}.nlp.get_sentences"},
        {"method": "POST", "path": "/language", "name": f"{prefix}.nlp.get_language"},
        {"method": "POST", "path": "/record", "name": f"{prefix}.record.put_record"},
    ]

    def by_path(routes: list[dict]) -> list[dict]:
        return sorted(routes, key=lambda r: (r["path"], r["method"]))

    assert by_path(response.json()) == by_path(expected)


@pytest.mark.asyncio
async def test_unexpected_exception_is_rendered_as_json(app: FastAPI):
    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("unexpected")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"code": 500, "message": "Internal Server Error"}
