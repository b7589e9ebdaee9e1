"""Shared fixtures: an in-process gateway with an in-memory record store."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from nlp_gateway.core.config import settings
from nlp_gateway.main import create_app
from nlp_gateway.services.record_store import RecordStore
from nlp_gateway.services.upstream import create_http_client


class InMemoryRedis:
    """The subset of ``redis.asyncio.Redis`` used by ``RecordStore``."""

    def __init__(self, *, fail: bool = False) -> None:
        self.data: dict[str, str] = {}
        self.expiries: dict[str, int | None] = {}
        self.fail = fail
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self._check()
        self.data[key] = value
        self.expiries[key] = ex
        return True

    async def ping(self) -> bool:
        self._check()
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "api_key", "")
    monkeypatch.setattr(settings, "upstream_api_key", None)


@pytest.fixture
def redis_backend() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def record_store(redis_backend: InMemoryRedis) -> RecordStore:
    return RecordStore(redis_backend, key_prefix="record")


@pytest.fixture
async def app(record_store: RecordStore) -> AsyncIterator[FastAPI]:
    application = create_app()
    application.state.http_client = create_http_client()
    application.state.record_store = record_store
    yield application
    await application.state.http_client.aclose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
