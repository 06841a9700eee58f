"""Signup API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SendInvitesRequest(BaseModel):
    """Fields are optional so missing values produce the documented 400."""

    model_config = ConfigDict(populate_by_name=True)

    app: str | None = None
    invite_link: str | None = Field(default=None, alias="inviteLink")
    emails: list[str] | None = None


class SignupResponse(BaseModel):
    id: str
    name: str
    email: str
    app: str
    social_media: str | None = None
    comments: str | None = None
    email_sent: bool
    email_sent_at: datetime | None = None
    created_at: datetime
