"""Access key email delivery."""

from datetime import UTC, datetime

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.email.service import EmailService, get_email_service
from src.core.infrastructure.email.template_loader import render_email
from src.core.infrastructure.logging import BusinessEvents

ACCESS_KEY_SUBJECT = "Admin Access Key - Kosmic Apps Dashboard"


def build_access_key_email(
    username: str, email: str, access_key: str, generated_at: datetime
) -> tuple[str, str]:
    """Render the HTML and plain text bodies."""
    expire_minutes = max(1, settings.ACCESS_KEY_EXPIRE_SECONDS // 60)
    return render_email(
        "access_key",
        username=username,
        email=email,
        access_key=access_key,
        expire_minutes=expire_minutes,
        generated_at=generated_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
        support_email=settings.SUPPORT_EMAIL,
    )


class SMTPAccessKeyMailer:
    """AccessKeyMailer sending through the shared EmailService."""

    def __init__(self, email_service: EmailService | None = None):
        self.email_service = email_service or get_email_service()

    async def send_access_key(self, email: str, username: str, access_key: str) -> bool:
        html_body, plain_body = build_access_key_email(
            username, email, access_key, datetime.now(UTC)
        )
        result = await self.email_service.send_email(
            to_email=email,
            subject=ACCESS_KEY_SUBJECT,
            html_body=html_body,
            plain_body=plain_body,
        )
        BusinessEvents.email_sent(
            to_email=email, email_type="access_key", success=result.success
        )
        if not result.success:
            logger.error(f"Access key email failed: {result.error}")
        return result.success
