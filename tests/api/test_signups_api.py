"""HTTP tests for the admin signup data endpoints."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

from src.core.config import settings
from src.core.infrastructure.security.jwt import create_session_token
from src.modules.signups.application import dependencies as signups_deps
from src.modules.signups.domain.entities import FormInteraction, Signup
from src.modules.signups.domain.exceptions import SignupStoreError
from src.modules.signups.domain.repository import (
    FormInteractionRepository,
    SignupRepository,
)

pytestmark = pytest.mark.anyio

TEST_SECRET = "test-secret-key-for-testing-only"
T0 = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


class InMemorySignupRepository(SignupRepository):
    def __init__(self, signups: list[Signup]) -> None:
        self.signups = signups
        self.fail = False

    async def list_newest_first(self) -> list[Signup]:
        if self.fail:
            raise SignupStoreError("Failed to fetch signups")
        return sorted(self.signups, key=lambda s: s.created_at, reverse=True)

    async def list_by_email(self, email: str) -> list[Signup]:
        return [s for s in self.signups if s.email == email]

    async def mark_invited(self, email: str, sent_at: datetime) -> int:
        matches = [s for s in self.signups if s.email == email]
        for signup in matches:
            signup.mark_invited(sent_at)
        return len(matches)


class InMemoryFormInteractionRepository(FormInteractionRepository):
    def __init__(self, interactions: list[FormInteraction]) -> None:
        self.interactions = interactions

    async def list_newest_first(self) -> list[FormInteraction]:
        return sorted(self.interactions, key=lambda i: i.timestamp, reverse=True)


class FakeInviteMailer:
    def __init__(self) -> None:
        self.sent: list[str] = []

    async def send_invite(
        self, email: str, name: str, app: str, invite_link: str
    ) -> bool:
        self.sent.append(email)
        return True


@pytest.fixture
def signup_repository() -> InMemorySignupRepository:
    return InMemorySignupRepository(
        [
            Signup(name="Old", email="old@example.com", app="Nebula", created_at=T0),
            Signup(
                name="New",
                email="new@example.com",
                app="Orbit",
                social_media="@new",
                created_at=T0 + timedelta(days=1),
            ),
        ]
    )


@pytest.fixture
def invite_mailer() -> FakeInviteMailer:
    return FakeInviteMailer()


@pytest.fixture
async def signups_client(
    async_client, signup_repository, invite_mailer
) -> AsyncGenerator[AsyncClient, None]:
    from main import app

    interactions = InMemoryFormInteractionRepository(
        [
            FormInteraction(session_id="s", event_type="page_visit", timestamp=T0),
            FormInteraction(
                session_id="s",
                event_type="field_focus",
                field_name="name",
                timestamp=T0 + timedelta(seconds=1),
            ),
        ]
    )
    app.dependency_overrides[signups_deps.get_signup_repository] = lambda: (
        signup_repository
    )
    app.dependency_overrides[signups_deps.get_form_interaction_repository] = lambda: (
        interactions
    )
    app.dependency_overrides[signups_deps.get_invite_mailer] = lambda: invite_mailer
    yield async_client


def _auth() -> dict[str, str]:
    token = create_session_token(
        "admin", "admin@example.com", "fp", datetime.now(UTC), secret_key=TEST_SECRET
    )
    return {"Cookie": f"{settings.ADMIN_SESSION_COOKIE_NAME}={token}"}


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/admin/signups"),
        ("GET", "/admin/form-analytics"),
        ("POST", "/admin/send-invites"),
    ],
)
async def test_requires_session(signups_client, method, path) -> None:
    response = await signups_client.request(method, path, json={})
    assert response.status_code == 401
    assert response.json()["error"] == "Authentication required"
    assert response.json()["authenticated"] is False


async def test_list_signups_newest_first(signups_client) -> None:
    response = await signups_client.get("/admin/signups", headers=_auth())

    assert response.status_code == 200
    body = response.json()
    assert [s["email"] for s in body] == ["new@example.com", "old@example.com"]
    assert body[0]["social_media"] == "@new"
    assert body[0]["email_sent"] is False


async def test_list_signups_store_failure(signups_client, signup_repository) -> None:
    signup_repository.fail = True
    response = await signups_client.get("/admin/signups", headers=_auth())
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch signups"


async def test_form_analytics(signups_client) -> None:
    response = await signups_client.get("/admin/form-analytics", headers=_auth())

    assert response.status_code == 200
    body = response.json()
    assert body["totalPageVisits"] == 1
    assert body["totalFormStarts"] == 1
    assert body["conversionRates"]["visitToStart"] == 100.0
    assert body["fieldInteractions"]["name"] == 1
    assert len(body["recentInteractions"]) == 2
    assert body["abandonmentPoints"]["afterName"] == 1


async def test_send_invites(signups_client, signup_repository, invite_mailer) -> None:
    response = await signups_client.post(
        "/admin/send-invites",
        json={
            "app": "Nebula",
            "inviteLink": "https://testflight.example/join",
            "emails": ["old@example.com", "ghost@example.com"],
        },
        headers=_auth(),
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "emailsSent": 1,
        "failedEmails": ["ghost@example.com"],
        "message": "1 invites sent successfully",
    }
    assert invite_mailer.sent == ["old@example.com"]
    old = next(s for s in signup_repository.signups if s.email == "old@example.com")
    assert old.email_sent is True


async def test_send_invites_missing_fields(signups_client) -> None:
    response = await signups_client.post(
        "/admin/send-invites",
        json={"app": "Nebula", "emails": ["old@example.com"]},
        headers=_auth(),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"
