"""Form input screening shared by the admin auth endpoints."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.admin_auth.domain.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    SecurityViolationError,
)
from src.modules.admin_auth.domain.ports import InputClassifier
from src.modules.admin_auth.domain.repository import IpBanList


class FormSecurityService:
    """Bans, classifies and sanitizes submitted form fields."""

    def __init__(self, classifier: InputClassifier, ban_list: IpBanList):
        self.classifier = classifier
        self.ban_list = ban_list

    async def ensure_not_banned(self, client_ip: str) -> None:
        if await self.ban_list.is_banned(client_ip):
            logger.warning(f"Banned IP attempted admin access: {client_ip}")
            raise AccessDeniedError()

    async def screen(self, client_ip: str, fields: dict[str, str]) -> dict[str, str]:
        """Return sanitized fields or raise.

        Raises:
            SecurityViolationError: high/critical pattern found, IP is banned
            InvalidInputError: low/medium pattern found
        """
        result = self.classifier.classify(fields)
        if result.allowed:
            return result.sanitized

        for field in sorted({threat.field for threat in result.threats}):
            BusinessEvents.security_threat_detected(
                ip_address=client_ip,
                field=field,
                threats=[
                    {"type": t.type, "severity": t.severity}
                    for t in result.threats
                    if t.field == field
                ],
            )

        if result.should_ban:
            reason = "High-severity threats detected: " + ", ".join(
                sorted({t.type for t in result.threats})
            )
            await self.ban_list.ban(client_ip, reason)
            raise SecurityViolationError()

        raise InvalidInputError()
