"""Admin auth domain entities."""

import math
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field


class AccessKeyRecord(BaseModel):
    """One-time access key issued to the admin email."""

    key: str = Field(..., description="Shared secret presented at login")
    email: str = Field(..., description="Email the key was sent to")
    username: str = Field(..., description="Username the key was issued for")
    created_at: datetime = Field(..., description="Issue time (UTC)")

    def age(self, now: datetime) -> timedelta:
        return now - self.created_at

    def is_expired(self, now: datetime, lifetime_seconds: int) -> bool:
        """A key is usable up to and including ``lifetime_seconds`` old."""
        return self.age(now) > timedelta(seconds=lifetime_seconds)


class RateLimitRecord(BaseModel):
    """Failed-attempt counter and lockout window for one fingerprint."""

    fingerprint: str
    attempts: int = Field(default=0, ge=0)
    last_attempt: datetime
    is_blocked: bool = False
    block_until: datetime | None = None

    def block_expired(self, now: datetime) -> bool:
        return (
            self.is_blocked and self.block_until is not None and now > self.block_until
        )

    def seconds_remaining(self, now: datetime) -> int:
        if self.block_until is None:
            return 0
        return max(0, math.ceil((self.block_until - now).total_seconds()))

    def block(self, now: datetime, duration: timedelta) -> None:
        self.is_blocked = True
        self.block_until = now + duration


class RateLimitStatus(BaseModel):
    """Outcome of a rate limit check."""

    allowed: bool
    attempts: int = 0
    time_remaining: int = 0

    @property
    def is_blocked(self) -> bool:
        return not self.allowed

    def to_info(self) -> "RateLimitInfo":
        return RateLimitInfo(
            attempts=self.attempts,
            is_blocked=self.is_blocked,
            time_remaining=self.time_remaining,
        )


class RateLimitInfo(BaseModel):
    """Attempt state reported back to the login page."""

    attempts: int
    is_blocked: bool
    time_remaining: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "attempts": self.attempts,
            "isBlocked": self.is_blocked,
            "timeRemaining": self.time_remaining,
        }


class AdminPrincipal(BaseModel):
    """Authenticated administrator."""

    username: str
    email: str


class AdminIdentity(BaseModel):
    """The single authorized administrator, as configured.

    Either value may be missing from configuration; handlers report that as
    a server configuration error at request time.
    """

    username: str | None = None
    email: str | None = None

    def matches_email(self, email: str) -> bool:
        return self.email is not None and email.lower() == self.email.lower()

    def matches_username(self, username: str) -> bool:
        return self.username is not None and username.lower() == self.username.lower()
