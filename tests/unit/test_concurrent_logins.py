"""Login races over a state store that yields on every call.

A networked backend (Redis) suspends the caller on each round trip, so
concurrent requests interleave between reads and writes. The store below
does the same while keeping the memory store's atomic operations atomic.
"""

import asyncio

import pytest

from src.core.infrastructure.kv.memory import InMemoryKeyValueStore
from src.modules.admin_auth.application.commands import (
    AdminLoginCommand,
    RequestAccessKeyCommand,
)
from src.modules.admin_auth.application.fingerprint import generate_fingerprint
from src.modules.admin_auth.domain.exceptions import (
    InvalidCredentialsError,
    RateLimitedError,
)

pytestmark = pytest.mark.anyio

UA = "Mozilla/5.0 test"
IP = "203.0.113.10"


class YieldingKeyValueStore(InMemoryKeyValueStore):
    async def get_json(self, key):
        await asyncio.sleep(0)
        return await super().get_json(key)

    async def set_json(self, key, value, ex=None):
        await asyncio.sleep(0)
        return await super().set_json(key, value, ex=ex)

    async def delete(self, *keys):
        await asyncio.sleep(0)
        return await super().delete(*keys)

    async def exists(self, *keys):
        await asyncio.sleep(0)
        return await super().exists(*keys)

    async def pop_json_if(self, key, predicate):
        await asyncio.sleep(0)
        return await super().pop_json_if(key, predicate)

    async def update_json(self, key, update):
        await asyncio.sleep(0)
        return await super().update_json(key, update)


@pytest.fixture
def kv_store() -> YieldingKeyValueStore:
    return YieldingKeyValueStore()


def _login(access_key: str) -> AdminLoginCommand:
    return AdminLoginCommand(
        username="admin",
        email="admin@example.com",
        access_key=access_key,
        client_ip=IP,
        user_agent=UA,
    )


async def _issue(issue_handler) -> str:
    record = await issue_handler.handle(
        RequestAccessKeyCommand(
            username="admin", email="admin@example.com", client_ip=IP, user_agent=UA
        )
    )
    return record.key


async def test_same_key_logs_in_only_once(issue_handler, login_handler) -> None:
    key = await _issue(issue_handler)

    results = await asyncio.gather(
        login_handler.handle(_login(key)),
        login_handler.handle(_login(key)),
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert isinstance(failures[0], InvalidCredentialsError)


async def test_parallel_wrong_keys_are_all_counted(
    issue_handler, login_handler, rate_limiter
) -> None:
    key = await _issue(issue_handler)

    results = await asyncio.gather(
        *(login_handler.handle(_login("WRONGKEY1234")) for _ in range(10)),
        return_exceptions=True,
    )

    rejected = [r for r in results if isinstance(r, InvalidCredentialsError)]
    limited = [r for r in results if isinstance(r, RateLimitedError)]
    assert len(rejected) + len(limited) == 10
    assert len(rejected) >= 4
    record = await rate_limiter.store.get(generate_fingerprint(UA, IP))
    assert record.attempts == len(rejected)

    with pytest.raises(RateLimitedError):
        await login_handler.handle(_login(key))
