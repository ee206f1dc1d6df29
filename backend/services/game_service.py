"""Game flows: upcoming listing, stage listing, bet form and bet submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from betting.bet_validator import MAX_ID, AcceptedBet, BetDecision, BetSubmission, validate_bet
from betting.match_window import DayGroup, compute_window, group_by_day
from models.player import Player
from models.prediction import Prediction
from repositories.player_repo import PlayerRepository
from repositories.prediction_repo import PredictionRepository

logger = logging.getLogger(__name__)


class MatchNotFoundError(LookupError):
    """No prediction of the current user matches the requested match."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f'Match with id "{identifier}" not found.')
        self.identifier = identifier


@dataclass
class BetForm:
    prediction: Prediction
    home_team_players: List[Player]
    away_team_players: List[Player]


def parse_match_slug(slug: str) -> Optional[int]:
    """Match id from a slug like "match-12" (second "-" separated part)."""
    parts = slug.split("-")
    if len(parts) < 2:
        return None
    try:
        match_id = int(parts[1])
    except ValueError:
        return None
    if not 0 < match_id <= MAX_ID:
        return None
    return match_id


async def list_upcoming(
    session: AsyncSession,
    user_id: int,
    now: datetime,
    tz: tzinfo,
) -> List[DayGroup[Prediction]]:
    """User's predictions inside the betting window, grouped by day."""
    window = compute_window(now, tz)
    predictions = await PredictionRepository(session).list_for_user_starting_between(
        user_id, window.start, window.end
    )
    return group_by_day(predictions, lambda p: p.match.start_date_utc, now, tz)


async def list_playoff_stage(
    session: AsyncSession, user_id: int, playoff_id: str
) -> List[Prediction]:
    return await PredictionRepository(session).list_for_user_by_playoff(user_id, playoff_id)


async def _players_of(session: AsyncSession, prediction: Prediction) -> tuple[List[Player], List[Player]]:
    match = prediction.match
    players = await PlayerRepository(session).list_by_teams(
        [match.home_team_id, match.away_team_id]
    )
    home = [p for p in players if p.team_id == match.home_team_id]
    away = [p for p in players if p.team_id == match.away_team_id]
    return home, away


async def load_bet_form(session: AsyncSession, user_id: int, match_slug: str) -> BetForm:
    """Prediction and both squads for the betting form; MatchNotFoundError if absent."""
    match_id = parse_match_slug(match_slug)
    if match_id is None:
        raise MatchNotFoundError(match_slug)
    prediction = await PredictionRepository(session).get_for_user_and_match(user_id, match_id)
    if prediction is None:
        raise MatchNotFoundError(match_slug)
    home, away = await _players_of(session, prediction)
    return BetForm(prediction=prediction, home_team_players=home, away_team_players=away)


async def submit_bet(
    session: AsyncSession,
    user_id: int,
    match_slug: str,
    prediction_id: int,
    home_team_score: Optional[str],
    away_team_score: Optional[str],
    goal_scorer_id: Optional[str],
    now: datetime,
) -> BetDecision:
    """Validate a submitted bet against server-known match data and persist if accepted.

    The prediction must belong to the user and to the match in the URL.
    """
    match_id = parse_match_slug(match_slug)
    repo = PredictionRepository(session)
    prediction = await repo.get_by_id(prediction_id)
    if (
        prediction is None
        or prediction.user_id != user_id
        or match_id is None
        or prediction.match_id != match_id
    ):
        raise MatchNotFoundError(match_slug)

    match = prediction.match
    submission = BetSubmission(
        prediction_id=prediction.id,
        home_team_id=match.home_team_id,
        away_team_id=match.away_team_id,
        match_start_date=match.start_date_utc,
        home_team_score=home_team_score,
        away_team_score=away_team_score,
        goal_scorer_id=goal_scorer_id,
    )
    home, away = await _players_of(session, prediction)
    eligible = {p.id for p in home} | {p.id for p in away}

    decision = validate_bet(submission, now, eligible_scorer_ids=eligible)
    if isinstance(decision, AcceptedBet):
        await repo.update_bet(
            decision.prediction_id,
            decision.home_team_score,
            decision.away_team_score,
            decision.goal_scorer_id,
        )
        logger.info(
            "Bet accepted: prediction=%s match=%s score=%s-%s scorer=%s",
            decision.prediction_id,
            match.id,
            decision.home_team_score,
            decision.away_team_score,
            decision.goal_scorer_id,
        )
    else:
        logger.info(
            "Bet rejected: prediction=%s match=%s reason=%s",
            prediction.id,
            match.id,
            decision.reason,
        )
    return decision
