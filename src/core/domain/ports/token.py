"""Session token service port."""

from datetime import UTC, datetime
from typing import Protocol

from pydantic import BaseModel, Field


class SessionTokenPayload(BaseModel):
    """Admin session token payload."""

    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    login_time: int = Field(..., alias="loginTime", ge=0, description="Epoch ms")
    fingerprint: str = Field(...)

    model_config = {"populate_by_name": True}

    @property
    def logged_in_at(self) -> datetime:
        return datetime.fromtimestamp(self.login_time / 1000, tz=UTC)


class SessionTokenService(Protocol):
    def issue(
        self, username: str, email: str, fingerprint: str, login_time: datetime
    ) -> str: ...

    def decode(self, token: str) -> SessionTokenPayload | None: ...
