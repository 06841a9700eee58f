"""Admin auth state store interfaces."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from src.modules.admin_auth.domain.entities import AccessKeyRecord, RateLimitRecord


class AccessKeyStore(ABC):
    """Holds at most one outstanding access key per email."""

    @abstractmethod
    async def set(self, email: str, record: AccessKeyRecord) -> None:
        """Store a key, replacing any previous key for the email."""
        pass

    @abstractmethod
    async def get(self, email: str) -> AccessKeyRecord | None:
        pass

    @abstractmethod
    async def consume(self, email: str, access_key: str) -> AccessKeyRecord | None:
        """Atomically delete and return the record if it still holds ``access_key``.

        Of several concurrent callers with the same key, exactly one gets the
        record; the rest get None.
        """
        pass

    @abstractmethod
    async def delete(self, email: str) -> bool:
        """Delete the key for the email. Returns True if one existed."""
        pass


class RateLimitStore(ABC):
    """Failed-attempt records keyed by caller fingerprint."""

    @abstractmethod
    async def get(self, fingerprint: str) -> RateLimitRecord | None:
        pass

    @abstractmethod
    async def update(
        self,
        fingerprint: str,
        mutate: Callable[[RateLimitRecord | None], RateLimitRecord],
        ttl_for: Callable[[RateLimitRecord], int],
    ) -> RateLimitRecord:
        """Atomically replace the record with ``mutate(current)``.

        The store may drop the result after ``ttl_for(result)`` seconds.
        """
        pass

    @abstractmethod
    async def delete(self, fingerprint: str) -> bool:
        pass


class IpBanList(ABC):
    """IP addresses banned after high-severity input."""

    @abstractmethod
    async def is_banned(self, ip_address: str) -> bool:
        pass

    @abstractmethod
    async def ban(self, ip_address: str, reason: str) -> None:
        pass
