"""Signup module ports."""

from typing import Protocol


class InviteMailer(Protocol):
    """Port for sending beta invitations."""

    async def send_invite(
        self, email: str, name: str, app: str, invite_link: str
    ) -> bool:
        """Send one invite. Returns False when delivery failed."""
        ...
