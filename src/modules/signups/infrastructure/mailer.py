"""Beta invite email delivery."""

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.email.service import EmailService, get_email_service
from src.core.infrastructure.email.template_loader import render_email
from src.core.infrastructure.logging import BusinessEvents


def invite_subject(app: str) -> str:
    return f"You're Invited to {app} Beta!"


class SMTPInviteMailer:
    """InviteMailer sending through the shared EmailService."""

    def __init__(self, email_service: EmailService | None = None):
        self.email_service = email_service or get_email_service()

    async def send_invite(
        self, email: str, name: str, app: str, invite_link: str
    ) -> bool:
        html_body, plain_body = render_email(
            "invite",
            name=name,
            email=email,
            app=app,
            invite_link=invite_link,
            support_email=settings.SUPPORT_EMAIL,
        )
        result = await self.email_service.send_email(
            to_email=email,
            subject=invite_subject(app),
            html_body=html_body,
            plain_body=plain_body,
        )
        BusinessEvents.email_sent(
            to_email=email, email_type="beta_invite", success=result.success
        )
        if not result.success:
            logger.warning(f"Invite email to {email} failed: {result.error}")
        return result.success
