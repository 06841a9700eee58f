"""Tests for RequestAccessKeyHandler."""

import pytest

from src.core.domain.exceptions import ConfigurationError
from src.modules.admin_auth.application.commands import RequestAccessKeyCommand
from src.modules.admin_auth.application.fingerprint import generate_fingerprint
from src.modules.admin_auth.application.handlers import RequestAccessKeyHandler
from src.modules.admin_auth.domain.entities import AdminIdentity
from src.modules.admin_auth.domain.exceptions import (
    AccessKeyDispatchError,
    InvalidEmailFormatError,
    MissingFieldsError,
    RateLimitedError,
    SecurityViolationError,
    UnauthorizedEmailError,
    UnauthorizedUsernameError,
)

pytestmark = pytest.mark.anyio

UA = "Mozilla/5.0 test"
IP = "203.0.113.10"


def _command(
    username: str | None = "admin", email: str | None = "admin@example.com"
) -> RequestAccessKeyCommand:
    return RequestAccessKeyCommand(
        username=username, email=email, client_ip=IP, user_agent=UA
    )


async def test_issues_and_stores_key(issue_handler, key_store, mailer, clock) -> None:
    record = await issue_handler.handle(_command())

    stored = await key_store.get("admin@example.com")
    assert stored == record
    assert stored.created_at == clock.now
    assert len(stored.key) == 12
    assert mailer.sent == [("admin@example.com", "admin", stored.key)]


async def test_identity_match_is_case_insensitive(issue_handler, mailer) -> None:
    await issue_handler.handle(_command(username="ADMIN", email="Admin@Example.com"))
    assert mailer.sent[0][0] == "Admin@Example.com"


async def test_second_issue_replaces_first(issue_handler, key_store, mailer) -> None:
    await issue_handler.handle(_command())
    first = mailer.last_key
    await issue_handler.handle(_command())
    second = mailer.last_key

    assert first != second
    assert (await key_store.get("admin@example.com")).key == second


@pytest.mark.parametrize(
    ("username", "email"),
    [(None, "admin@example.com"), ("admin", None), ("", "admin@example.com")],
)
async def test_missing_fields(issue_handler, mailer, username, email) -> None:
    with pytest.raises(MissingFieldsError) as exc_info:
        await issue_handler.handle(_command(username=username, email=email))
    assert exc_info.value.message == "Username and email are required"
    assert mailer.sent == []


async def test_invalid_email_format(issue_handler) -> None:
    with pytest.raises(InvalidEmailFormatError):
        await issue_handler.handle(_command(email="not-an-email"))


async def test_malicious_input_rejected_before_identity(issue_handler, mailer) -> None:
    with pytest.raises(SecurityViolationError):
        await issue_handler.handle(_command(username="<script>alert(1)</script>"))
    assert mailer.sent == []


async def test_unauthorized_email_not_counted(issue_handler, rate_limiter) -> None:
    for _ in range(6):
        with pytest.raises(UnauthorizedEmailError) as exc_info:
            await issue_handler.handle(_command(email="intruder@example.com"))
        assert exc_info.value.http_status_code == 403

    status = await rate_limiter.status(generate_fingerprint(UA, IP))
    assert status.attempts == 0


async def test_unauthorized_username(issue_handler, mailer) -> None:
    with pytest.raises(UnauthorizedUsernameError) as exc_info:
        await issue_handler.handle(_command(username="root"))
    assert exc_info.value.response_extra() == {}
    assert mailer.sent == []


async def test_blocked_fingerprint_rejected(issue_handler, rate_limiter, mailer) -> None:
    fingerprint = generate_fingerprint(UA, IP)
    for _ in range(4):
        await rate_limiter.record_failed_attempt(fingerprint)

    with pytest.raises(RateLimitedError) as exc_info:
        await issue_handler.handle(_command())

    assert exc_info.value.http_status_code == 429
    assert exc_info.value.response_extra() == {
        "rateLimitInfo": {"attempts": 4, "isBlocked": True, "timeRemaining": 1800}
    }
    assert mailer.sent == []


async def test_dispatch_failure_keeps_key(issue_handler, key_store, mailer) -> None:
    mailer.succeed = False

    with pytest.raises(AccessKeyDispatchError) as exc_info:
        await issue_handler.handle(_command())

    assert exc_info.value.http_status_code == 500
    stored = await key_store.get("admin@example.com")
    assert stored is not None
    assert stored.key == mailer.last_key


@pytest.mark.parametrize(
    ("identity", "setting"),
    [
        (AdminIdentity(username="admin", email=None), "ACCESS_EMAIL"),
        (AdminIdentity(username=None, email="admin@example.com"), "ACCESS_USERNAME"),
    ],
)
async def test_missing_configuration(
    key_store, rate_limiter, form_security, mailer, clock, identity, setting
) -> None:
    handler = RequestAccessKeyHandler(
        key_store, rate_limiter, form_security, mailer, identity, clock=clock
    )
    with pytest.raises(ConfigurationError) as exc_info:
        await handler.handle(_command())

    assert exc_info.value.http_status_code == 500
    assert exc_info.value.setting_name == setting
    assert exc_info.value.message == "Server configuration error"
