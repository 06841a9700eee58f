"""Admin auth application commands."""

from pydantic import BaseModel


class RequestAccessKeyCommand(BaseModel):
    """Request a one-time access key by email."""

    username: str | None = None
    email: str | None = None
    client_ip: str = "unknown"
    user_agent: str = ""


class AdminLoginCommand(BaseModel):
    """Exchange an access key for an admin session."""

    username: str | None = None
    email: str | None = None
    access_key: str | None = None
    client_ip: str = "unknown"
    user_agent: str = ""
