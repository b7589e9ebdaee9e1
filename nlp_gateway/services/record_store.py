"""Record persistence on Redis."""

from __future__ import annotations

import json
import uuid
from typing import Any

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

from nlp_gateway.core.config import settings
from nlp_gateway.core.errors import GatewayError

logger = structlog.get_logger()


def record_id(record: dict[str, Any]) -> str:
    """Use the record's own string ``id`` when it has one, else a fresh UUID."""
    rid = record.get("id")
    if isinstance(rid, str) and rid.strip():
        return rid.strip()
    return uuid.uuid4().hex


class RecordStore:
    """Stores JSON records under ``<prefix>:<id>`` keys."""

    def __init__(
        self,
        client: aioredis.Redis,
        *,
        key_prefix: str = "record",
        ttl_seconds: int | None = None,
    ) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls) -> RecordStore:
        client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(
            client,
            key_prefix=settings.record_key_prefix,
            ttl_seconds=settings.record_ttl_seconds,
        )

    def key(self, rid: str) -> str:
        return f"{self._key_prefix}:{rid}"

    async def put(self, record: dict[str, Any]) -> str:
        """Persist a record and return its id."""
        rid = record_id(record)
        try:
            await self._client.set(
                self.key(rid), json.dumps(record, default=str), ex=self._ttl_seconds
            )
        except RedisError as exc:
            logger.error("record_store_failed", record_id=rid, error=str(exc))
            raise GatewayError(500, f"Record store unavailable: {exc}") from exc

        logger.info("record_stored", record_id=rid, ttl_seconds=self._ttl_seconds)
        return rid

    async def ping(self) -> bool:
        """Connectivity probe; a failure is logged and reported as False."""
        try:
            ok = bool(await self._client.ping())
        except RedisError as exc:
            logger.warning("record_store_unreachable", key_prefix=self._key_prefix, error=str(exc))
            return False
        logger.info("record_store_connected", key_prefix=self._key_prefix)
        return ok

    async def close(self) -> None:
        await self._client.aclose()
