"""Services: composition layer between routes, repositories and betting rules."""

from .auth_service import authenticate, register_user
from .game_service import (
    MatchNotFoundError,
    list_playoff_stage,
    list_upcoming,
    load_bet_form,
    submit_bet,
)

__all__ = [
    "authenticate",
    "register_user",
    "MatchNotFoundError",
    "list_playoff_stage",
    "list_upcoming",
    "load_bet_form",
    "submit_bet",
]
