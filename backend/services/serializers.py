"""JSON shapes for predictions, matches, teams and players."""

from __future__ import annotations

from typing import Any, Dict, Optional

from core.clock import ensure_utc
from models.match import Match
from models.player import Player
from models.prediction import Prediction
from models.team import Team


def team_to_dict(team: Optional[Team]) -> Optional[Dict[str, Any]]:
    if team is None:
        return None
    # flag None -> clients draw a placeholder circle
    return {"id": team.id, "name": team.name, "flag": team.flag}


def match_to_dict(match: Match) -> Dict[str, Any]:
    return {
        "id": match.id,
        "stage": match.stage,
        "group": match.group,
        "playoff": match.playoff,
        "is_playoff": match.is_playoff,
        "stadium": match.stadium,
        "start_date": ensure_utc(match.start_date_utc).isoformat(),
        "home_team": team_to_dict(match.home_team),
        "away_team": team_to_dict(match.away_team),
    }


def prediction_to_dict(prediction: Prediction) -> Dict[str, Any]:
    return {
        "id": prediction.id,
        "home_team_score": prediction.home_team_score,
        "away_team_score": prediction.away_team_score,
        "goal_scorer_id": prediction.goal_scorer_id,
        "match": match_to_dict(prediction.match),
    }


def player_to_dict(player: Player, goal_scorer_id: Optional[int]) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "team_id": player.team_id,
        "is_goal_scorer": player.id == goal_scorer_id,
    }


def hidden_fields_for(prediction: Prediction) -> Dict[str, Any]:
    """Hidden form bundle echoed back on submit."""
    match = prediction.match
    return {
        "predictionId": prediction.id,
        "homeTeamId": match.home_team_id,
        "awayTeamId": match.away_team_id,
        "matchStartDate": ensure_utc(match.start_date_utc).isoformat(),
    }
