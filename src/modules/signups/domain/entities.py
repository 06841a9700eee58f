"""Signup domain entities."""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Signup(BaseModel):
    """A pre-beta signup."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    email: str
    app: str = Field(..., description="App the person signed up for")
    social_media: str | None = None
    comments: str | None = None
    email_sent: bool = False
    email_sent_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utc_now)

    def mark_invited(self, sent_at: datetime) -> None:
        self.email_sent = True
        self.email_sent_at = sent_at


class FormEventType(str, Enum):
    PAGE_VISIT = "page_visit"
    FIELD_FOCUS = "field_focus"
    FIELD_BLUR = "field_blur"
    FORM_ABANDON = "form_abandon"
    FORM_SUBMIT = "form_submit"


class FormInteraction(BaseModel):
    """One tracked event on the signup form."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    session_id: str
    event_type: str
    field_name: str | None = None
    email: str | None = None
    name: str | None = None
    app_selection: str | None = None
    user_agent: str | None = None
    referrer: str | None = None
    timestamp: datetime = Field(default_factory=_utc_now)
