"""Signup application commands."""

from pydantic import BaseModel


class SendInvitesCommand(BaseModel):
    """Send the beta invite for ``app`` to each email."""

    app: str | None = None
    invite_link: str | None = None
    emails: list[str] | None = None
