"""SQLAlchemy models for the match prediction game.

Importing this package registers every table on ``Base.metadata``.
"""

from .base import Base
from .match import Match
from .player import Player
from .prediction import Prediction
from .team import Team
from .user import User

__all__ = [
    "Base",
    "Match",
    "Player",
    "Prediction",
    "Team",
    "User",
]
