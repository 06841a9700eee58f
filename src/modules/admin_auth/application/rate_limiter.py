"""Failed-attempt rate limiting keyed by caller fingerprint.

Policy:
- every failed credential check increments the attempt counter
- once the counter reaches ``max_attempts`` the next check blocks the
  fingerprint for ``lockout``
- a block lifts strictly after ``block_until``; the record is then dropped
- a successful login drops the record
"""

from datetime import timedelta

from loguru import logger

from src.core.config import settings
from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.admin_auth.domain.entities import RateLimitRecord, RateLimitStatus
from src.modules.admin_auth.domain.repository import RateLimitStore


class RateLimiter:
    """Decides whether a fingerprint may request keys or attempt login."""

    def __init__(
        self,
        store: RateLimitStore,
        max_attempts: int | None = None,
        lockout: timedelta | None = None,
        idle_ttl: timedelta | None = None,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.max_attempts = max_attempts or settings.ADMIN_MAX_FAILED_ATTEMPTS
        self.lockout = lockout or timedelta(minutes=settings.ADMIN_LOCKOUT_MINUTES)
        self.idle_ttl = idle_ttl or timedelta(hours=settings.ADMIN_ATTEMPT_WINDOW_HOURS)
        self.clock = clock

    @property
    def lockout_seconds(self) -> int:
        return int(self.lockout.total_seconds())

    def _ttl_for(self, record: RateLimitRecord) -> int:
        if record.is_blocked:
            return record.seconds_remaining(self.clock()) + 1
        return int(self.idle_ttl.total_seconds())

    async def check(self, fingerprint: str) -> RateLimitStatus:
        """Check the fingerprint, starting a lockout when the threshold is hit."""
        record = await self.store.get(fingerprint)
        now = self.clock()

        if record is None:
            return RateLimitStatus(allowed=True)

        if record.block_expired(now):
            await self.store.delete(fingerprint)
            logger.info(f"Lockout expired for fingerprint {fingerprint}")
            return RateLimitStatus(allowed=True)

        if record.is_blocked:
            return RateLimitStatus(
                allowed=False,
                attempts=record.attempts,
                time_remaining=record.seconds_remaining(now),
            )

        if record.attempts >= self.max_attempts:
            started = False

            def start_lockout(current: RateLimitRecord | None) -> RateLimitRecord:
                nonlocal started
                current = current or record
                if not current.is_blocked:
                    current.block(now, self.lockout)
                    started = True
                return current

            record = await self.store.update(
                fingerprint, start_lockout, self._ttl_for
            )
            if started:
                BusinessEvents.admin_locked_out(
                    fingerprint=fingerprint,
                    attempts=record.attempts,
                    block_seconds=self.lockout_seconds,
                )
            return RateLimitStatus(
                allowed=False,
                attempts=record.attempts,
                time_remaining=record.seconds_remaining(now),
            )

        return RateLimitStatus(allowed=True, attempts=record.attempts)

    async def record_failed_attempt(self, fingerprint: str) -> int:
        """Count one failure. Returns the updated attempt count."""
        now = self.clock()

        def bump(current: RateLimitRecord | None) -> RateLimitRecord:
            if current is None:
                return RateLimitRecord(
                    fingerprint=fingerprint, attempts=1, last_attempt=now
                )
            current.attempts += 1
            current.last_attempt = now
            return current

        record = await self.store.update(fingerprint, bump, self._ttl_for)
        return record.attempts

    async def clear(self, fingerprint: str) -> None:
        await self.store.delete(fingerprint)

    async def status(self, fingerprint: str) -> RateLimitStatus:
        """Report what ``check`` would decide, without changing any state."""
        record = await self.store.get(fingerprint)
        now = self.clock()

        if record is None or record.block_expired(now):
            return RateLimitStatus(allowed=True)

        if record.is_blocked:
            return RateLimitStatus(
                allowed=False,
                attempts=record.attempts,
                time_remaining=record.seconds_remaining(now),
            )

        if record.attempts >= self.max_attempts:
            return RateLimitStatus(
                allowed=False,
                attempts=record.attempts,
                time_remaining=self.lockout_seconds,
            )

        return RateLimitStatus(allowed=True, attempts=record.attempts)
