from __future__ import annotations

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Session holder shared by the repositories.

    No commits are performed here - commit responsibility is left to the
    service layer (or the request-scoped session).
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity to the session (not committed)."""
        self.session.add(entity)
        return entity

    async def get_by_id(self, model: Type[T], id_value: str | int) -> Optional[T]:
        """Get an entity by its primary key."""
        return await self.session.get(model, id_value)

