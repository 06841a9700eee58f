"""
pytest configuration and shared fixtures.

Test layout:
- unit/: pure unit tests (no external services)
- api/: HTTP tests against the ASGI app with in-memory state

Usage:
    # run everything
    uv run pytest

    # unit tests only
    uv run pytest tests/unit/
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.infrastructure.kv.memory import InMemoryKeyValueStore
from src.core.infrastructure.security.jwt import JWTSessionTokenService
from src.modules.admin_auth.application.form_security import FormSecurityService
from src.modules.admin_auth.application.handlers import (
    AdminLoginHandler,
    RequestAccessKeyHandler,
)
from src.modules.admin_auth.application.rate_limiter import RateLimiter
from src.modules.admin_auth.domain.entities import AdminIdentity
from src.modules.admin_auth.infrastructure.input_classifier import (
    PatternInputClassifier,
)
from src.modules.admin_auth.infrastructure.stores import (
    KVAccessKeyStore,
    KVIpBanList,
    KVRateLimitStore,
)

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# Time control
# ============================================


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 6, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================
# Collaborator fakes
# ============================================


class RecordingMailer:
    """AccessKeyMailer that keeps the keys it was asked to send."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: list[tuple[str, str, str]] = []

    async def send_access_key(self, email: str, username: str, access_key: str) -> bool:
        self.sent.append((email, username, access_key))
        return self.succeed

    @property
    def last_key(self) -> str:
        return self.sent[-1][2]


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def admin_identity() -> AdminIdentity:
    return AdminIdentity(username=ADMIN_USERNAME, email=ADMIN_EMAIL)


@pytest.fixture
def token_service() -> JWTSessionTokenService:
    return JWTSessionTokenService(secret_key=TEST_SECRET)


@pytest.fixture
def key_store(kv_store) -> KVAccessKeyStore:
    return KVAccessKeyStore(kv_store, lifetime_seconds=120)


@pytest.fixture
def rate_limiter(kv_store, clock) -> RateLimiter:
    return RateLimiter(
        KVRateLimitStore(kv_store),
        max_attempts=4,
        lockout=timedelta(minutes=30),
        clock=clock,
    )


@pytest.fixture
def form_security(kv_store) -> FormSecurityService:
    return FormSecurityService(PatternInputClassifier(), KVIpBanList(kv_store))


@pytest.fixture
def issue_handler(
    key_store, rate_limiter, form_security, mailer, admin_identity, clock
) -> RequestAccessKeyHandler:
    return RequestAccessKeyHandler(
        key_store, rate_limiter, form_security, mailer, admin_identity, clock=clock
    )


@pytest.fixture
def login_handler(
    key_store, rate_limiter, form_security, token_service, admin_identity, clock
) -> AdminLoginHandler:
    return AdminLoginHandler(
        key_store,
        rate_limiter,
        form_security,
        token_service,
        admin_identity,
        clock=clock,
        key_lifetime_seconds=120,
    )


# ============================================
# HTTP client
# ============================================


@pytest.fixture
async def async_client(
    kv_store, mailer, admin_identity, token_service
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the admin app with in-memory auth state."""
    from main import app
    from src.modules.admin_auth.application import dependencies as admin_auth_deps

    saved_overrides = dict(app.dependency_overrides)

    app.dependency_overrides[admin_auth_deps.get_access_key_store] = lambda: (
        KVAccessKeyStore(kv_store)
    )
    app.dependency_overrides[admin_auth_deps.get_rate_limit_store] = lambda: (
        KVRateLimitStore(kv_store)
    )
    app.dependency_overrides[admin_auth_deps.get_ip_ban_list] = lambda: KVIpBanList(
        kv_store
    )
    app.dependency_overrides[admin_auth_deps.get_input_classifier] = lambda: (
        PatternInputClassifier()
    )
    app.dependency_overrides[admin_auth_deps.get_access_key_mailer] = lambda: mailer
    app.dependency_overrides[admin_auth_deps.get_session_token_service] = lambda: (
        token_service
    )
    app.dependency_overrides[admin_auth_deps.get_admin_identity] = lambda: (
        admin_identity
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"User-Agent": "pytest-browser"},
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(saved_overrides)
