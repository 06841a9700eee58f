"""Outbound email over SMTP.

The SMTP exchange is blocking, so each send runs in a worker thread and is
bounded by ``EMAIL_SEND_TIMEOUT_SEC``. Retries are opt-in: an access key
email that arrives late is worse than one that fails fast.
"""

import asyncio
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.health import EmailHealthResult


@dataclass
class EmailResult:
    success: bool
    message_id: str | None = None
    error: str | None = None
    retry_count: int = 0


@dataclass
class SMTPProvider:
    """Blocking SMTP sender. Use ``from_settings()`` for the configured one."""

    host: str | None
    port: int
    from_email: str | None
    from_name: str | None = None
    user: str | None = None
    password: str | None = None
    use_tls: bool = True
    use_ssl: bool = False
    timeout: float = 15.0

    @classmethod
    def from_settings(cls) -> "SMTPProvider":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            from_email=settings.EMAILS_FROM_EMAIL,
            from_name=settings.EMAILS_FROM_NAME,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_TLS,
            use_ssl=settings.SMTP_SSL,
            timeout=settings.EMAIL_SEND_TIMEOUT_SEC,
        )

    def is_configured(self) -> bool:
        return bool(self.host and self.from_email)

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.use_ssl:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=self.timeout
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            if self.use_tls:
                server.starttls(context=context)
        if self.user and self.password:
            server.login(self.user, self.password)
        return server

    def build_message(
        self, to_email: str, subject: str, html_body: str, plain_body: str | None
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name or "", self.from_email or ""))
        msg["To"] = to_email
        msg["Date"] = formatdate(usegmt=True)
        msg["Message-ID"] = make_msgid()
        # text/plain first so clients that prefer the last part pick the HTML
        msg.set_content(plain_body or "")
        msg.add_alternative(html_body, subtype="html")
        return msg

    def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        plain_body: str | None = None,
    ) -> EmailResult:
        if not self.is_configured():
            return EmailResult(success=False, error="SMTP not configured")

        msg = self.build_message(to_email, subject, html_body, plain_body)
        try:
            with self._connect() as server:
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP login rejected: {e}")
            return EmailResult(success=False, error=f"Authentication failed: {e}")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {to_email} failed: {e}")
            return EmailResult(success=False, error=str(e))

        return EmailResult(success=True, message_id=msg["Message-ID"])


class EmailService:
    """Async facade over a provider: availability, timeout and retry."""

    def __init__(
        self,
        provider: SMTPProvider | None = None,
        max_retries: int = 1,
        base_delay: float = 1.0,
        timeout: float | None = None,
    ):
        self.provider = provider or SMTPProvider.from_settings()
        self.max_retries = max(1, max_retries)
        self.base_delay = base_delay
        self.timeout = timeout or settings.EMAIL_SEND_TIMEOUT_SEC

    def is_available(self) -> bool:
        return settings.EMAIL_ENABLED and self.provider.is_configured()

    async def _attempt(
        self, to_email: str, subject: str, html_body: str, plain_body: str | None
    ) -> EmailResult:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    self.provider.send, to_email, subject, html_body, plain_body
                ),
                timeout=self.timeout,
            )
        except TimeoutError:
            return EmailResult(success=False, error=f"Timed out after {self.timeout}s")

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        plain_body: str | None = None,
    ) -> EmailResult:
        if not self.is_available():
            logger.warning(f"Email disabled or SMTP unset, not sending to {to_email}")
            return EmailResult(success=False, error="Email service not available")

        result = EmailResult(success=False)
        for attempt in range(self.max_retries):
            if attempt:
                await asyncio.sleep(self.base_delay * 2 ** (attempt - 1))
            result = await self._attempt(to_email, subject, html_body, plain_body)
            result.retry_count = attempt
            if result.success:
                logger.info(f"Email sent to {to_email}")
                return result
            logger.warning(
                f"Email to {to_email} failed "
                f"(attempt {attempt + 1}/{self.max_retries}): {result.error}"
            )
        return result

    def get_health_status(self) -> EmailHealthResult:
        return EmailHealthResult(
            available=self.is_available(),
            smtp_configured=self.provider.is_configured(),
            email_enabled=settings.EMAIL_ENABLED,
        )


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
