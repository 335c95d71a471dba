"""
Generic persistence helpers shared by table-specific CRUD classes.

Dependencies: sqlalchemy
System role: Insert and primary-key lookup for any registered model
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from speaker_companion.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Insert/lookup operations bound to one ORM model.

    Sessions are always passed in; committing is the caller's decision.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **columns) -> ModelT:
        """
        Insert a row and load server/default-generated columns back.

        Args:
            session: Open async session
            **columns: Column values for the new row

        Returns:
            The flushed and refreshed instance
        """
        row = self.model(**columns)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Fetch a row by primary key, or None."""
        return await session.get(self.model, id)
