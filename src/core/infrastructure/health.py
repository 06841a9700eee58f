"""Shared health check result types.

Every infrastructure component reports its health with these models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health check status."""

    OK = "ok"
    ERROR = "error"


class DatabaseHealthResult(BaseModel):
    """Database health check result."""

    status: HealthStatus = Field(..., description="Health status")
    connected: bool = Field(..., description="Whether the connection succeeded")
    version: str | None = Field(None, description="PostgreSQL version")
    error: str | None = Field(None, description="Error message")

    def to_dict(self) -> dict[str, str | bool | None]:
        return self.model_dump(mode="json", exclude_none=False)


class RedisHealthResult(BaseModel):
    """Redis health check result."""

    status: HealthStatus = Field(..., description="Health status")
    connected: bool = Field(..., description="Whether the connection succeeded")
    version: str | None = Field(None, description="Redis version")
    error: str | None = Field(None, description="Error message")

    def to_dict(self) -> dict[str, str | bool | None]:
        return self.model_dump(mode="json", exclude_none=False)


class EmailHealthResult(BaseModel):
    """Email service health check result."""

    available: bool = Field(..., description="Whether email can be sent")
    smtp_configured: bool = Field(..., description="Whether SMTP is configured")
    email_enabled: bool = Field(..., description="Whether email is switched on")

    def to_dict(self) -> dict[str, bool]:
        return self.model_dump(mode="json")
