"""Shared auth state backends."""

from src.core.config import settings
from src.core.domain.ports.kv_store import KeyValueStore
from src.core.infrastructure.kv.keys import StateKeys
from src.core.infrastructure.kv.memory import (
    InMemoryKeyValueStore,
    memory_store,
)
from src.core.infrastructure.redis import redis_client


def get_state_store() -> KeyValueStore:
    """Return the configured state backend."""
    if settings.STATE_BACKEND == "redis":
        return redis_client
    return memory_store


__all__ = [
    "InMemoryKeyValueStore",
    "StateKeys",
    "get_state_store",
    "memory_store",
]
