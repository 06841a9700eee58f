"""Key-value backed admin auth stores.

Work with either the in-process memory store or Redis. Every record is
written with a TTL so the backend drops stale state on its own.
"""

import hmac
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from src.core.config import settings
from src.core.domain.ports.kv_store import KeyValueStore
from src.core.infrastructure.kv.keys import StateKeys
from src.core.infrastructure.logging import BusinessEvents
from src.modules.admin_auth.domain.entities import AccessKeyRecord, RateLimitRecord
from src.modules.admin_auth.domain.repository import (
    AccessKeyStore,
    IpBanList,
    RateLimitStore,
)

# Keys outlive their lifetime slightly so login can still report "expired".
ACCESS_KEY_TTL_GRACE_SECONDS = 60


class KVAccessKeyStore(AccessKeyStore):
    def __init__(self, kv: KeyValueStore, lifetime_seconds: int | None = None):
        self.kv = kv
        self.ttl = (
            lifetime_seconds or settings.ACCESS_KEY_EXPIRE_SECONDS
        ) + ACCESS_KEY_TTL_GRACE_SECONDS

    async def set(self, email: str, record: AccessKeyRecord) -> None:
        await self.kv.set_json(
            StateKeys.access_key(email), record.model_dump(mode="json"), ex=self.ttl
        )

    async def get(self, email: str) -> AccessKeyRecord | None:
        data = await self.kv.get_json(StateKeys.access_key(email))
        if data is None:
            return None
        return AccessKeyRecord.model_validate(data)

    async def consume(self, email: str, access_key: str) -> AccessKeyRecord | None:
        def holds_key(data: Any) -> bool:
            return hmac.compare_digest(
                str(data.get("key", "")).encode("utf-8"), access_key.encode("utf-8")
            )

        data = await self.kv.pop_json_if(StateKeys.access_key(email), holds_key)
        if data is None:
            return None
        return AccessKeyRecord.model_validate(data)

    async def delete(self, email: str) -> bool:
        return await self.kv.delete(StateKeys.access_key(email)) > 0


class KVRateLimitStore(RateLimitStore):
    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    async def get(self, fingerprint: str) -> RateLimitRecord | None:
        data = await self.kv.get_json(StateKeys.rate_limit(fingerprint))
        if data is None:
            return None
        return RateLimitRecord.model_validate(data)

    async def update(
        self,
        fingerprint: str,
        mutate: Callable[[RateLimitRecord | None], RateLimitRecord],
        ttl_for: Callable[[RateLimitRecord], int],
    ) -> RateLimitRecord:
        def apply(data: Any | None) -> tuple[Any, int]:
            current = None if data is None else RateLimitRecord.model_validate(data)
            record = mutate(current)
            return record.model_dump(mode="json"), max(1, ttl_for(record))

        data = await self.kv.update_json(StateKeys.rate_limit(fingerprint), apply)
        return RateLimitRecord.model_validate(data)

    async def delete(self, fingerprint: str) -> bool:
        return await self.kv.delete(StateKeys.rate_limit(fingerprint)) > 0


class KVIpBanList(IpBanList):
    def __init__(self, kv: KeyValueStore, ban_hours: int | None = None):
        self.kv = kv
        self.ttl = (ban_hours or settings.ADMIN_IP_BAN_HOURS) * 3600

    async def is_banned(self, ip_address: str) -> bool:
        return await self.kv.exists(StateKeys.banned_ip(ip_address)) > 0

    async def ban(self, ip_address: str, reason: str) -> None:
        await self.kv.set_json(
            StateKeys.banned_ip(ip_address),
            {"reason": reason, "banned_at": datetime.now(UTC).isoformat()},
            ex=self.ttl,
        )
        BusinessEvents.ip_banned(
            ip_address=ip_address, reason=reason, ban_seconds=self.ttl
        )
