"""Row-to-entity mapping for read-mostly tables."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, TypeVar

E = TypeVar("E")
M = TypeVar("M")


class RowMapper(ABC, Generic[E, M]):
    """Turns ORM rows into domain entities.

    Rows are owned by another writer, so there is no entity-to-row direction.
    """

    @abstractmethod
    def to_domain(self, model: M) -> E: ...

    def to_domain_list(self, models: Iterable[M]) -> list[E]:
        return [self.to_domain(model) for model in models]
