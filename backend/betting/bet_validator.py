"""
Bet submission validator: decides whether a submitted bet is accepted.

Checks run in a fixed order and the first failure wins:
1. locked               - now is after the match start
2. teams-not-set        - home or away team not decided yet
3. no-result            - either score missing
4. invalid-score        - a score is not a base-10 integer from 0 to MAX_SCORE
5. invalid-goal-scorer  - scorer id not a number, or not on either squad

A scorer id of "0" (or nothing) means "no scorer" and is stored as None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Collection, Optional, Union

from core.clock import ensure_utc

REASON_LOCKED = "locked"
REASON_TEAMS_NOT_SET = "teams-not-set"
REASON_NO_RESULT = "no-result"
REASON_INVALID_SCORE = "invalid-score"
REASON_INVALID_GOAL_SCORER = "invalid-goal-scorer"

REASON_MESSAGES = {
    REASON_LOCKED: "Match started or ended, cannot change bets.",
    REASON_TEAMS_NOT_SET: "Teams have not yet been selected.",
    REASON_NO_RESULT: "No result selected.",
    REASON_INVALID_SCORE: "Scores must be whole numbers from 0 to 99.",
    REASON_INVALID_GOAL_SCORER: "Selected goal scorer does not play in this match.",
}

NO_SCORER = 0
MAX_SCORE = 99
# largest id the store can hold (signed 64-bit)
MAX_ID = 2**63 - 1

_DIGITS = re.compile(r"\d+", re.ASCII)


@dataclass
class BetSubmission:
    """One submitted bet as it arrives from the form (scores are raw text)."""

    prediction_id: int
    home_team_id: Optional[str]
    away_team_id: Optional[str]
    match_start_date: datetime
    home_team_score: Optional[str]
    away_team_score: Optional[str]
    goal_scorer_id: Optional[str] = None


@dataclass
class AcceptedBet:
    """Typed values to persist on the prediction row."""

    prediction_id: int
    home_team_score: int
    away_team_score: int
    goal_scorer_id: Optional[int]


@dataclass
class RejectedBet:
    reason: str
    message: str


BetDecision = Union[AcceptedBet, RejectedBet]


def _reject(reason: str) -> RejectedBet:
    return RejectedBet(reason=reason, message=REASON_MESSAGES[reason])


def _is_blank(value: Optional[object]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_score(text: str) -> Optional[int]:
    """Base-10 integer in 0..MAX_SCORE, or None if text is not one."""
    stripped = text.strip()
    if not _DIGITS.fullmatch(stripped):
        return None
    value = int(stripped, 10)
    if value > MAX_SCORE:
        return None
    return value


def parse_goal_scorer(text: Optional[str]) -> tuple[bool, Optional[int]]:
    """Return (ok, scorer_id). Blank and "0" map to (True, None)."""
    if _is_blank(text):
        return True, None
    stripped = text.strip()
    if not _DIGITS.fullmatch(stripped):
        return False, None
    value = int(stripped, 10)
    if value > MAX_ID:
        return False, None
    if value == NO_SCORER:
        return True, None
    return True, value


def validate_bet(
    submission: BetSubmission,
    now: datetime,
    eligible_scorer_ids: Optional[Collection[int]] = None,
) -> BetDecision:
    """Run the checks in order. eligible_scorer_ids=None skips the squad check."""
    if ensure_utc(now) > ensure_utc(submission.match_start_date):
        return _reject(REASON_LOCKED)

    if _is_blank(submission.home_team_id) or _is_blank(submission.away_team_id):
        return _reject(REASON_TEAMS_NOT_SET)

    if _is_blank(submission.home_team_score) or _is_blank(submission.away_team_score):
        return _reject(REASON_NO_RESULT)

    home = parse_score(submission.home_team_score)
    away = parse_score(submission.away_team_score)
    if home is None or away is None:
        return _reject(REASON_INVALID_SCORE)

    ok, scorer_id = parse_goal_scorer(submission.goal_scorer_id)
    if not ok:
        return _reject(REASON_INVALID_GOAL_SCORER)
    if (
        scorer_id is not None
        and eligible_scorer_ids is not None
        and scorer_id not in eligible_scorer_ids
    ):
        return _reject(REASON_INVALID_GOAL_SCORER)

    return AcceptedBet(
        prediction_id=submission.prediction_id,
        home_team_score=home,
        away_team_score=away,
        goal_scorer_id=scorer_id,
    )
