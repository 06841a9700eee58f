"""Signup command handlers."""

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.signups.application.commands import SendInvitesCommand
from src.modules.signups.application.models import SendInvitesResult
from src.modules.signups.domain.exceptions import InviteFieldsMissingError
from src.modules.signups.domain.ports import InviteMailer
from src.modules.signups.domain.repository import SignupRepository


class SendInvitesHandler:
    """Send beta invites one email at a time.

    A failure for one email is recorded in ``failed_emails`` and does not
    stop the batch.
    """

    def __init__(
        self,
        signup_repository: SignupRepository,
        mailer: InviteMailer,
        clock: Clock = utc_now,
    ):
        self.signup_repository = signup_repository
        self.mailer = mailer
        self.clock = clock
        self.logger = logger

    async def _send_one(self, email: str, app: str, invite_link: str) -> bool:
        signups = await self.signup_repository.list_by_email(email)
        if not signups:
            self.logger.warning(f"No signup found for invite email {email}")
            return False

        sent = await self.mailer.send_invite(
            email=email, name=signups[0].name, app=app, invite_link=invite_link
        )
        if not sent:
            return False

        updated = await self.signup_repository.mark_invited(email, self.clock())
        self.logger.info(f"Marked {updated} signup(s) invited for {email}")
        return True

    async def handle(self, command: SendInvitesCommand) -> SendInvitesResult:
        if not command.app or not command.invite_link or not command.emails:
            raise InviteFieldsMissingError()

        emails_sent = 0
        failed: list[str] = []
        for email in command.emails:
            try:
                ok = await self._send_one(email, command.app, command.invite_link)
            except Exception as e:
                self.logger.exception(f"Error processing invite for {email}: {e}")
                ok = False

            if ok:
                emails_sent += 1
            else:
                failed.append(email)

        BusinessEvents.invites_sent(
            app=command.app, sent=emails_sent, failed=len(failed)
        )
        return SendInvitesResult(
            success=True,
            emails_sent=emails_sent,
            failed_emails=failed,
            message=f"{emails_sent} invites sent successfully",
        )
