"""Key-value state store port."""

from collections.abc import Callable
from typing import Any, Protocol

# Receives the current value (None when absent) and returns (new value, ttl).
JsonUpdate = Callable[[Any | None], tuple[Any, int | None]]


class KeyValueStore(Protocol):
    """Shared mutable state with per-key expiry.

    Implemented by the in-process memory store (single instance) and by the
    Redis client (multi-instance deployments). ``pop_json_if`` and
    ``update_json`` are atomic with respect to every other caller of the
    same backend; read-then-write sequences built from ``get_json`` and
    ``set_json`` are not.
    """

    async def get_json(self, key: str) -> Any | None: ...

    async def set_json(self, key: str, value: Any, ex: int | None = None) -> bool: ...

    async def delete(self, *keys: str) -> int: ...

    async def exists(self, *keys: str) -> int: ...

    async def pop_json_if(
        self, key: str, predicate: Callable[[Any], bool]
    ) -> Any | None:
        """Delete and return the value if ``predicate`` accepts it."""
        ...

    async def update_json(self, key: str, update: JsonUpdate) -> Any:
        """Replace the value with ``update(current)``. Returns the new value."""
        ...
