"""Redis state backend."""

from src.core.infrastructure.redis.client import RedisClient, redis_client

__all__ = ["RedisClient", "redis_client"]
