from __future__ import annotations

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.player import Player
from .base import BaseRepository


class PlayerRepository(BaseRepository[Player]):
    """Repository for Player entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_by_teams(self, team_ids: Iterable[str]) -> List[Player]:
        """Players of the given teams, ordered by team then name."""
        ids = [t for t in team_ids if t]
        if not ids:
            return []
        stmt = (
            select(Player)
            .where(Player.team_id.in_(ids))
            .order_by(Player.team_id, Player.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
