"""Repository layer for DB access only (CRUD + simple queries).

Repositories are pure DB access - no business logic. They accept an
AsyncSession explicitly and never commit.
"""

from .base import BaseRepository
from .match_repo import MatchRepository
from .player_repo import PlayerRepository
from .prediction_repo import PredictionRepository
from .user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "MatchRepository",
    "PlayerRepository",
    "PredictionRepository",
    "UserRepository",
]
