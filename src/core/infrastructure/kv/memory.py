"""In-process key-value store.

Mirrors the subset of Redis semantics the auth state needs (JSON values,
per-key expiry). State is lost on restart and is not shared between
processes, so it is only suitable for a single-instance deployment.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable
from typing import Any

from loguru import logger

from src.core.domain.ports.kv_store import JsonUpdate


class InMemoryKeyValueStore:
    """Dict-backed store with lazy expiry plus an explicit sweep."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        # key -> (serialized value, absolute expiry or None)
        self._data: dict[str, tuple[str, float | None]] = {}

    def _is_expired(self, expires_at: float | None, now: float) -> bool:
        return expires_at is not None and now >= expires_at

    def _live_entry(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        raw, expires_at = entry
        if self._is_expired(expires_at, self._clock()):
            del self._data[key]
            return None
        return raw

    async def get_json(self, key: str) -> Any | None:
        raw = self._live_entry(key)
        if raw is None:
            return None
        return json.loads(raw)

    def _put(self, key: str, value: Any, ex: int | None) -> None:
        expires_at = self._clock() + ex if ex else None
        self._data[key] = (json.dumps(value, ensure_ascii=False), expires_at)

    async def set_json(self, key: str, value: Any, ex: int | None = None) -> bool:
        self._put(key, value, ex)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._live_entry(key) is not None:
                removed += 1
            self._data.pop(key, None)
        return removed

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if self._live_entry(key) is not None)

    # The two methods below never await, so they run without interleaving.

    async def pop_json_if(
        self, key: str, predicate: Callable[[Any], bool]
    ) -> Any | None:
        raw = self._live_entry(key)
        if raw is None:
            return None
        value = json.loads(raw)
        if not predicate(value):
            return None
        del self._data[key]
        return value

    async def update_json(self, key: str, update: JsonUpdate) -> Any:
        raw = self._live_entry(key)
        value, ex = update(None if raw is None else json.loads(raw))
        self._put(key, value, ex)
        return value

    def sweep_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [
            key
            for key, (_, expires_at) in self._data.items()
            if self._is_expired(expires_at, now)
        ]
        for key in expired:
            del self._data[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._data)

    async def run_sweeper(self, interval_sec: float) -> None:
        """Periodically sweep expired entries until cancelled."""
        while True:
            await asyncio.sleep(interval_sec)
            removed = self.sweep_expired()
            if removed:
                logger.debug(f"Swept {removed} expired in-memory state entries")


memory_store = InMemoryKeyValueStore()
