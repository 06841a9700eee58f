"""Signup module application dependencies.

Defines dependency providers for interfaces layer without importing infrastructure.
"""

from typing import NoReturn

from fastapi import Depends

from src.modules.signups.application.analytics_service import FormAnalyticsService
from src.modules.signups.application.handlers import SendInvitesHandler
from src.modules.signups.domain.ports import InviteMailer
from src.modules.signups.domain.repository import (
    FormInteractionRepository,
    SignupRepository,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_signup_repository() -> SignupRepository:
    _missing_dependency("SignupRepository")


async def get_form_interaction_repository() -> FormInteractionRepository:
    _missing_dependency("FormInteractionRepository")


async def get_invite_mailer() -> InviteMailer:
    _missing_dependency("InviteMailer")


async def get_form_analytics_service(
    interaction_repository: FormInteractionRepository = Depends(
        get_form_interaction_repository
    ),
) -> FormAnalyticsService:
    return FormAnalyticsService(interaction_repository)


async def get_send_invites_handler(
    signup_repository: SignupRepository = Depends(get_signup_repository),
    mailer: InviteMailer = Depends(get_invite_mailer),
) -> SendInvitesHandler:
    return SendInvitesHandler(signup_repository, mailer)
