"""Redis-backed auth state for multi-instance deployments."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import redis.asyncio as aioredis
from loguru import logger
from redis.exceptions import WatchError

if TYPE_CHECKING:
    from redis.asyncio import Redis

from src.core.config import settings
from src.core.domain.ports.kv_store import JsonUpdate
from src.core.infrastructure.health import HealthStatus, RedisHealthResult


class RedisClient:
    """KeyValueStore over a lazily created Redis connection pool."""

    def __init__(self, url: str | None = None):
        self._url = url or settings.REDIS_URL
        self._client: Redis | None = None

    @property
    def client(self) -> Redis:
        if self._client is None:
            self._client = aioredis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=5.0,
                socket_connect_timeout=5.0,
                retry_on_timeout=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def health_check(self) -> RedisHealthResult:
        """Ping Redis and report the server version."""
        try:
            await self.client.ping()
            info = await self.client.info("server")
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return RedisHealthResult(
                status=HealthStatus.ERROR,
                connected=False,
                error=str(e),
            )
        return RedisHealthResult(
            status=HealthStatus.OK,
            connected=True,
            version=info.get("redis_version", "unknown"),
        )

    async def get_json(self, key: str) -> Any | None:
        raw = await self.client.get(key)
        return None if raw is None else json.loads(raw)

    async def set_json(self, key: str, value: Any, ex: int | None = None) -> bool:
        # ex=None keeps the key until it is deleted (used for IP bans)
        return bool(
            await self.client.set(key, json.dumps(value, ensure_ascii=False), ex=ex)
        )

    async def delete(self, *keys: str) -> int:
        return await self.client.delete(*keys)

    async def exists(self, *keys: str) -> int:
        return await self.client.exists(*keys)

    # Optimistic transactions: WATCH the key, decide, then MULTI/EXEC. A
    # concurrent write to the key aborts EXEC and the loop re-reads.

    async def pop_json_if(
        self, key: str, predicate: Callable[[Any], bool]
    ) -> Any | None:
        async with self.client.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    if raw is None:
                        return None
                    value = json.loads(raw)
                    if not predicate(value):
                        return None
                    pipe.multi()
                    pipe.delete(key)
                    await pipe.execute()
                    return value
                except WatchError:
                    continue

    async def update_json(self, key: str, update: JsonUpdate) -> Any:
        async with self.client.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    value, ex = update(None if raw is None else json.loads(raw))
                    pipe.multi()
                    pipe.set(key, json.dumps(value, ensure_ascii=False), ex=ex)
                    await pipe.execute()
                    return value
                except WatchError:
                    continue


redis_client = RedisClient()
