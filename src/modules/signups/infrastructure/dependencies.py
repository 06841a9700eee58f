"""Signup module infrastructure dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.infrastructure.database.session import get_db_session
from src.modules.signups.infrastructure.mailer import SMTPInviteMailer
from src.modules.signups.infrastructure.mappers import (
    FormInteractionMapper,
    SignupMapper,
)
from src.modules.signups.infrastructure.repositories import (
    PostgreSQLFormInteractionRepository,
    PostgreSQLSignupRepository,
)


def get_signup_mapper() -> SignupMapper:
    return SignupMapper()


def get_form_interaction_mapper() -> FormInteractionMapper:
    return FormInteractionMapper()


async def get_signup_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: SignupMapper = Depends(get_signup_mapper),
) -> PostgreSQLSignupRepository:
    return PostgreSQLSignupRepository(session, mapper)


async def get_form_interaction_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: FormInteractionMapper = Depends(get_form_interaction_mapper),
) -> PostgreSQLFormInteractionRepository:
    return PostgreSQLFormInteractionRepository(session, mapper)


def get_invite_mailer() -> SMTPInviteMailer:
    return SMTPInviteMailer()
