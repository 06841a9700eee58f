"""Signup database models.

Rows are written by the public signup form; this backend reads them and
only updates the invite columns.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from src.core.domain.clock import utc_now


def _new_id() -> str:
    return str(uuid.uuid4())


class SignupModel(SQLModel, table=True):
    """Pre-beta signup submitted from the public form."""

    __tablename__ = "signups"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(nullable=False, max_length=200)
    email: str = Field(nullable=False, index=True, max_length=320)
    app: str = Field(nullable=False, max_length=100)
    social_media: str | None = Field(default=None, max_length=500)
    comments: str | None = Field(default=None)
    email_sent: bool = Field(default=False, nullable=False)
    email_sent_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )


class FormInteractionModel(SQLModel, table=True):
    """Tracked signup form event."""

    __tablename__ = "form_interactions"

    id: str = Field(default_factory=_new_id, primary_key=True)
    session_id: str = Field(nullable=False, index=True, max_length=100)
    event_type: str = Field(nullable=False, max_length=50)
    field_name: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=320)
    name: str | None = Field(default=None, max_length=200)
    app_selection: str | None = Field(default=None, max_length=100)
    user_agent: str | None = Field(default=None)
    referrer: str | None = Field(default=None)
    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
