from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .match import Match
from .player import Player


class Prediction(Base):
    """A user's bet on one match: final score and optional goal scorer."""

    __tablename__ = "user_matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    match_id: Mapped[int] = mapped_column(ForeignKey("matches.id"), nullable=False)
    home_team_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    away_team_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    goal_scorer_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("players.id"), nullable=True
    )

    match: Mapped[Match] = relationship(lazy="joined")
    goal_scorer: Mapped[Optional[Player]] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "match_id", name="uq_user_match"),
        CheckConstraint(
            "(home_team_score IS NULL) = (away_team_score IS NULL)",
            name="ck_scores_paired",
        ),
        CheckConstraint(
            "home_team_score IS NULL OR home_team_score >= 0",
            name="ck_home_score_non_negative",
        ),
        CheckConstraint(
            "away_team_score IS NULL OR away_team_score >= 0",
            name="ck_away_score_non_negative",
        ),
    )
