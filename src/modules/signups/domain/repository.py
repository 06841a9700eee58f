"""Signup repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.modules.signups.domain.entities import FormInteraction, Signup


class SignupRepository(ABC):
    @abstractmethod
    async def list_newest_first(self) -> list[Signup]:
        """All signups ordered by created_at descending."""
        pass

    @abstractmethod
    async def list_by_email(self, email: str) -> list[Signup]:
        """Signups with this email (duplicates are possible)."""
        pass

    @abstractmethod
    async def mark_invited(self, email: str, sent_at: datetime) -> int:
        """Flag every signup with this email as invited. Returns rows updated."""
        pass


class FormInteractionRepository(ABC):
    @abstractmethod
    async def list_newest_first(self) -> list[FormInteraction]:
        """All interactions ordered by timestamp descending."""
        pass
