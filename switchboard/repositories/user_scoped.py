"""
User-Scoped Repository

Base repository for entities owned by a single dashboard user. Every
query is filtered by the owner's ``user_id``; lookups by id distinguish
"missing" from "owned by someone else".
"""

from typing import Any, Generic
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.core.exceptions import AccessDeniedError
from switchboard.repositories.base import BaseRepository, ModelT


def _owner_filter(model: Any, user_id: str) -> Any:
    """Filter by user_id - bypasses type checking for generic model."""
    return model.user_id == user_id


class UserScopedRepository(BaseRepository[ModelT], Generic[ModelT]):
    """
    Repository with owner scoping.

    Example usage:
        class InvoiceRepository(UserScopedRepository[Invoice]):
            model = Invoice

            async def list_invoices(self) -> list[Invoice]:
                query = self.filter_owned(select(self.model))
                result = await self.session.execute(query)
                return list(result.scalars().all())
    """

    def __init__(self, session: AsyncSession, user_id: str):
        """
        Initialize repository with database session and owner scope.

        Args:
            session: SQLAlchemy async session
            user_id: Subject of the authenticated user
        """
        super().__init__(session)
        self.user_id = user_id

    def filter_owned(self, query: Select[tuple[ModelT]]) -> Select[tuple[ModelT]]:
        """WHERE user_id = :user_id"""
        return query.where(_owner_filter(self.model, self.user_id))

    async def get_owned(self, entity_id: UUID) -> ModelT | None:
        """
        Get an entity by id, checking ownership.

        Returns:
            The entity, or None if it does not exist

        Raises:
            AccessDeniedError: If the entity belongs to another user
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return None
        if entity.user_id != self.user_id:  # type: ignore[attr-defined]
            raise AccessDeniedError()
        return entity
