from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .team import Team

STAGE_GROUP = "GROUP_STAGE"
STAGE_PLAYOFF = "PLAYOFF_STAGE"


class Match(Base):
    """Tournament fixture. Teams stay empty until a playoff slot is decided."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_date_utc: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    stadium: Mapped[str] = mapped_column(String(255), nullable=False)
    stage: Mapped[str] = mapped_column(String(32), nullable=False)
    group: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    playoff: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    home_team_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("teams.id"), nullable=True
    )
    away_team_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("teams.id"), nullable=True
    )

    home_team: Mapped[Optional[Team]] = relationship(
        foreign_keys=[home_team_id], lazy="joined"
    )
    away_team: Mapped[Optional[Team]] = relationship(
        foreign_keys=[away_team_id], lazy="joined"
    )

    __table_args__ = (
        Index("ix_match_start_date", "start_date_utc"),
        Index("ix_match_playoff_start", "playoff", "start_date_utc"),
    )

    @property
    def is_playoff(self) -> bool:
        return self.playoff is not None
