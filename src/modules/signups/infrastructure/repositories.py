"""Signup repository implementations."""

from datetime import datetime

from loguru import logger
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from src.modules.signups.domain.entities import FormInteraction, Signup
from src.modules.signups.domain.exceptions import SignupStoreError
from src.modules.signups.domain.repository import (
    FormInteractionRepository,
    SignupRepository,
)
from src.modules.signups.infrastructure.mappers import (
    FormInteractionMapper,
    SignupMapper,
)
from src.modules.signups.infrastructure.models import (
    FormInteractionModel,
    SignupModel,
)


class PostgreSQLSignupRepository(SignupRepository):
    """PostgreSQL signup repository implementation."""

    def __init__(self, session: AsyncSession, mapper: SignupMapper):
        self.session = session
        self.mapper = mapper

    async def _execute_in_savepoint(self, statement, error_message: str):
        """Run one statement inside a SAVEPOINT.

        A failure rolls back only the savepoint; the request transaction stays
        usable for the rest of an invite batch.
        """
        try:
            async with self.session.begin_nested():
                return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"{error_message}: {e}")
            raise SignupStoreError(error_message) from e

    async def list_newest_first(self) -> list[Signup]:
        statement = select(SignupModel).order_by(col(SignupModel.created_at).desc())
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list signups: {e}")
            raise SignupStoreError("Failed to fetch signups") from e
        return self.mapper.to_domain_list(result.scalars().all())

    async def list_by_email(self, email: str) -> list[Signup]:
        statement = (
            select(SignupModel)
            .where(SignupModel.email == email)
            .order_by(col(SignupModel.created_at).desc())
        )
        result = await self._execute_in_savepoint(
            statement, f"Failed to look up signups for {email}"
        )
        return self.mapper.to_domain_list(result.scalars().all())

    async def mark_invited(self, email: str, sent_at: datetime) -> int:
        statement = (
            update(SignupModel)
            .where(col(SignupModel.email) == email)
            .values(email_sent=True, email_sent_at=sent_at)
        )
        result = await self._execute_in_savepoint(
            statement, f"Failed to mark {email} invited"
        )
        return result.rowcount or 0


class PostgreSQLFormInteractionRepository(FormInteractionRepository):
    """PostgreSQL form interaction repository implementation."""

    def __init__(self, session: AsyncSession, mapper: FormInteractionMapper):
        self.session = session
        self.mapper = mapper

    async def list_newest_first(self) -> list[FormInteraction]:
        statement = select(FormInteractionModel).order_by(
            col(FormInteractionModel.timestamp).desc()
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list form interactions: {e}")
            raise SignupStoreError("Failed to fetch form analytics") from e
        return self.mapper.to_domain_list(result.scalars().all())
