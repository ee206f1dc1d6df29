from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.match import Match
from .base import BaseRepository


class MatchRepository(BaseRepository[Match]):
    """Repository for Match entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_id(self, id: int) -> Optional[Match]:
        """Get match by ID."""
        return await super().get_by_id(Match, id)

    async def list_ids(self) -> List[int]:
        """All match ids in kickoff order."""
        stmt = select(Match.id).order_by(Match.start_date_utc, Match.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
