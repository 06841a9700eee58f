"""Admin auth command handlers."""

import hmac
import re
from dataclasses import dataclass

from loguru import logger

from src.core.config import settings
from src.core.domain.clock import Clock, utc_now
from src.core.domain.exceptions import ConfigurationError
from src.core.domain.ports.token import SessionTokenService
from src.core.infrastructure.logging import BusinessEvents
from src.modules.admin_auth.application.access_key import generate_access_key
from src.modules.admin_auth.application.commands import (
    AdminLoginCommand,
    RequestAccessKeyCommand,
)
from src.modules.admin_auth.application.fingerprint import generate_fingerprint
from src.modules.admin_auth.application.form_security import FormSecurityService
from src.modules.admin_auth.application.rate_limiter import RateLimiter
from src.modules.admin_auth.domain.entities import (
    AccessKeyRecord,
    AdminIdentity,
    AdminPrincipal,
    RateLimitInfo,
)
from src.modules.admin_auth.domain.exceptions import (
    AccessKeyDispatchError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    MissingFieldsError,
    RateLimitedError,
    UnauthorizedEmailError,
    UnauthorizedUsernameError,
)
from src.modules.admin_auth.domain.ports import AccessKeyMailer
from src.modules.admin_auth.domain.repository import AccessKeyStore

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


class RequestAccessKeyHandler:
    """Issue a one-time access key to the configured admin."""

    def __init__(
        self,
        key_store: AccessKeyStore,
        rate_limiter: RateLimiter,
        form_security: FormSecurityService,
        mailer: AccessKeyMailer,
        admin: AdminIdentity,
        clock: Clock = utc_now,
        key_length: int | None = None,
    ):
        self.key_store = key_store
        self.rate_limiter = rate_limiter
        self.form_security = form_security
        self.mailer = mailer
        self.admin = admin
        self.clock = clock
        self.key_length = key_length or settings.ACCESS_KEY_LENGTH
        self.logger = logger

    async def handle(self, command: RequestAccessKeyCommand) -> AccessKeyRecord:
        """Validate the requester, store a fresh key and email it.

        Any earlier unused key for the email is replaced. The key stays stored
        when the email cannot be sent; requesting again overwrites it.
        """
        await self.form_security.ensure_not_banned(command.client_ip)

        if not command.username or not command.email:
            raise MissingFieldsError("Username and email are required")

        sanitized = await self.form_security.screen(
            command.client_ip,
            {"username": command.username, "email": command.email},
        )
        username = sanitized["username"]
        email = sanitized["email"]

        if not is_valid_email(email):
            raise InvalidEmailFormatError()

        # Identity mismatches are not counted as failed attempts.
        if not self.admin.email:
            raise ConfigurationError("ACCESS_EMAIL")
        if not self.admin.matches_email(email):
            self.logger.warning("Access key requested for an unauthorized email")
            raise UnauthorizedEmailError()

        if not self.admin.username:
            raise ConfigurationError("ACCESS_USERNAME")
        if not self.admin.matches_username(username):
            self.logger.warning("Access key requested for an unauthorized username")
            raise UnauthorizedUsernameError()

        fingerprint = generate_fingerprint(command.user_agent, command.client_ip)
        rate_limit = await self.rate_limiter.check(fingerprint)
        if not rate_limit.allowed:
            raise RateLimitedError(
                "Too many attempts. Please try again later.",
                rate_limit.to_info(),
            )

        record = AccessKeyRecord(
            key=generate_access_key(self.key_length),
            email=email,
            username=username,
            created_at=self.clock(),
        )
        await self.key_store.set(email, record)
        BusinessEvents.access_key_issued(email=email, fingerprint=fingerprint)

        sent = await self.mailer.send_access_key(
            email=email, username=username, access_key=record.key
        )
        if not sent:
            raise AccessKeyDispatchError()

        self.logger.info(f"Access key sent to {email}")
        return record


@dataclass
class AdminLoginResult:
    principal: AdminPrincipal
    session_token: str
    fingerprint: str


class AdminLoginHandler:
    """Exchange a valid access key for a signed session token."""

    def __init__(
        self,
        key_store: AccessKeyStore,
        rate_limiter: RateLimiter,
        form_security: FormSecurityService,
        token_service: SessionTokenService,
        admin: AdminIdentity,
        clock: Clock = utc_now,
        key_lifetime_seconds: int | None = None,
    ):
        self.key_store = key_store
        self.rate_limiter = rate_limiter
        self.form_security = form_security
        self.token_service = token_service
        self.admin = admin
        self.clock = clock
        self.key_lifetime_seconds = (
            key_lifetime_seconds or settings.ACCESS_KEY_EXPIRE_SECONDS
        )
        self.logger = logger

    async def _fail(self, fingerprint: str, reason: str) -> RateLimitInfo:
        attempts = await self.rate_limiter.record_failed_attempt(fingerprint)
        is_blocked = attempts >= self.rate_limiter.max_attempts
        BusinessEvents.admin_login_failed(
            fingerprint=fingerprint, reason=reason, attempts=attempts
        )
        return RateLimitInfo(
            attempts=attempts,
            is_blocked=is_blocked,
            # The failure that reaches the limit reports the lockout its next
            # check will start. Failures below the limit always report 0.
            time_remaining=self.rate_limiter.lockout_seconds if is_blocked else 0,
        )

    async def handle(self, command: AdminLoginCommand) -> AdminLoginResult:
        await self.form_security.ensure_not_banned(command.client_ip)

        if not command.username or not command.email or not command.access_key:
            raise MissingFieldsError("All fields are required")

        sanitized = await self.form_security.screen(
            command.client_ip,
            {
                "username": command.username,
                "email": command.email,
                "accessKey": command.access_key,
            },
        )
        username = sanitized["username"]
        email = sanitized["email"]
        access_key = sanitized["accessKey"]

        fingerprint = generate_fingerprint(command.user_agent, command.client_ip)
        rate_limit = await self.rate_limiter.check(fingerprint)
        if not rate_limit.allowed:
            raise RateLimitedError(
                "Too many failed attempts. Access temporarily blocked.",
                rate_limit.to_info(),
            )

        stored = await self.key_store.get(email)
        if stored is None:
            reason = InvalidCredentialsError.KEY_NOT_FOUND
            raise InvalidCredentialsError(reason, await self._fail(fingerprint, reason))

        now = self.clock()
        if stored.is_expired(now, self.key_lifetime_seconds):
            await self.key_store.delete(email)
            reason = InvalidCredentialsError.KEY_EXPIRED
            raise InvalidCredentialsError(reason, await self._fail(fingerprint, reason))

        key_matches = hmac.compare_digest(
            stored.key.encode("utf-8"), access_key.encode("utf-8")
        )
        if not (stored.username == username and stored.email == email and key_matches):
            reason = InvalidCredentialsError.CREDENTIALS_MISMATCH
            raise InvalidCredentialsError(reason, await self._fail(fingerprint, reason))

        if not self.admin.username:
            raise ConfigurationError("ACCESS_USERNAME")
        if not self.admin.matches_username(username):
            raise UnauthorizedUsernameError(
                await self._fail(fingerprint, "unauthorized_username")
            )

        # Another request with the same key may have won since the read above.
        if await self.key_store.consume(email, access_key) is None:
            reason = InvalidCredentialsError.KEY_NOT_FOUND
            raise InvalidCredentialsError(reason, await self._fail(fingerprint, reason))

        await self.rate_limiter.clear(fingerprint)

        token = self.token_service.issue(
            username=username, email=email, fingerprint=fingerprint, login_time=now
        )
        BusinessEvents.admin_login_succeeded(
            username=username, email=email, fingerprint=fingerprint
        )
        return AdminLoginResult(
            principal=AdminPrincipal(username=username, email=email),
            session_token=token,
            fingerprint=fingerprint,
        )
