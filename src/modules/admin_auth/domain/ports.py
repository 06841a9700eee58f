"""Admin auth module ports."""

from typing import Protocol

from pydantic import BaseModel, Field


class DetectedThreat(BaseModel):
    """A suspicious pattern found in one input field."""

    field: str
    type: str
    severity: str = Field(..., description="low | medium | high | critical")


class ClassificationResult(BaseModel):
    """Allow/deny verdict plus sanitized field values."""

    allowed: bool
    sanitized: dict[str, str] = Field(default_factory=dict)
    threats: list[DetectedThreat] = Field(default_factory=list)
    should_ban: bool = False


class InputClassifier(Protocol):
    """Port for rejecting obviously malicious form input."""

    def classify(self, fields: dict[str, str]) -> ClassificationResult:
        """Scan and sanitize the given fields."""
        ...


class AccessKeyMailer(Protocol):
    """Port for delivering access keys to the admin."""

    async def send_access_key(self, email: str, username: str, access_key: str) -> bool:
        """Send the key. Returns False when delivery failed."""
        ...
