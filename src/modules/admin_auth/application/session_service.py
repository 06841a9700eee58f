"""Admin session validation."""

from datetime import timedelta

from loguru import logger

from src.core.config import settings
from src.core.domain.clock import Clock, utc_now
from src.core.domain.ports.token import SessionTokenService
from src.modules.admin_auth.domain.entities import AdminPrincipal


class SessionValidator:
    """Resolve a session cookie to the logged-in admin.

    Fails closed: a missing, malformed, tampered or expired token yields
    ``None`` and never raises. Sessions are not refreshed.
    """

    def __init__(
        self,
        token_service: SessionTokenService,
        max_age: timedelta | None = None,
        clock: Clock = utc_now,
    ):
        self.token_service = token_service
        self.max_age = max_age or timedelta(hours=settings.ADMIN_SESSION_MAX_AGE_HOURS)
        self.clock = clock

    def validate(self, token: str | None) -> AdminPrincipal | None:
        if not token:
            return None

        payload = self.token_service.decode(token)
        if payload is None:
            return None

        age = self.clock() - payload.logged_in_at
        if age > self.max_age:
            logger.info(f"Admin session expired for {payload.email}")
            return None

        return AdminPrincipal(username=payload.username, email=payload.email)
