"""Admin auth API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SendAccessKeyRequest(BaseModel):
    """Fields are optional so missing values produce the documented 400."""

    username: str | None = None
    email: str | None = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    email: str | None = None
    access_key: str | None = Field(default=None, alias="accessKey")


class AdminUserResponse(BaseModel):
    username: str
    email: str


class CheckAuthResponse(BaseModel):
    authenticated: bool
    user: AdminUserResponse | None = None


class RateLimitStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    attempts: int
    is_blocked: bool = Field(..., serialization_alias="isBlocked")
    time_remaining: int = Field(..., serialization_alias="timeRemaining")
