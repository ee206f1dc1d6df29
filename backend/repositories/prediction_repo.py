from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.match import Match
from models.prediction import Prediction
from .base import BaseRepository


class PredictionRepository(BaseRepository[Prediction]):
    """Repository for Prediction (user match) entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_id(self, id: int) -> Optional[Prediction]:
        return await super().get_by_id(Prediction, id)

    async def create_for_user(self, user_id: int, match_ids: Iterable[int]) -> List[Prediction]:
        """Add one empty prediction per match for the user (not committed)."""
        created = [Prediction(user_id=user_id, match_id=mid) for mid in match_ids]
        self.session.add_all(created)
        await self.session.flush()
        return created

    async def list_for_user_starting_between(
        self,
        user_id: int,
        start_from: datetime,
        start_before: datetime,
    ) -> List[Prediction]:
        """User's predictions whose match starts in [start_from, start_before), by kickoff."""
        stmt = (
            select(Prediction)
            .join(Match, Prediction.match_id == Match.id)
            .where(Prediction.user_id == user_id)
            .where(Match.start_date_utc >= start_from)
            .where(Match.start_date_utc < start_before)
            .order_by(Match.start_date_utc, Match.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user_by_playoff(self, user_id: int, playoff: str) -> List[Prediction]:
        """User's predictions for matches of one playoff stage, by kickoff."""
        stmt = (
            select(Prediction)
            .join(Match, Prediction.match_id == Match.id)
            .where(Prediction.user_id == user_id)
            .where(Match.playoff == playoff)
            .order_by(Match.start_date_utc, Match.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user_and_match(self, user_id: int, match_id: int) -> Optional[Prediction]:
        stmt = (
            select(Prediction)
            .where(Prediction.user_id == user_id)
            .where(Prediction.match_id == match_id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update_bet(
        self,
        prediction_id: int,
        home_team_score: int,
        away_team_score: int,
        goal_scorer_id: Optional[int],
    ) -> int:
        """Single-row UPDATE of scores and scorer. Returns the affected row count."""
        stmt = (
            update(Prediction)
            .where(Prediction.id == prediction_id)
            .values(
                home_team_score=home_team_score,
                away_team_score=away_team_score,
                goal_scorer_id=goal_scorer_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount
