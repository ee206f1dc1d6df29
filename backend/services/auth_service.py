"""Registration and login."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.clock import utc_now
from core.session import check_password, hash_password
from models.user import User
from repositories.match_repo import MatchRepository
from repositories.prediction_repo import PredictionRepository
from repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class UsernameTakenError(ValueError):
    pass


async def register_user(session: AsyncSession, username: str, password: str) -> User:
    """Create the user and one empty prediction per existing match."""
    users = UserRepository(session)
    if await users.get_by_username(username) is not None:
        raise UsernameTakenError(f"Username {username!r} is already taken")
    user = await users.create(
        User(
            username=username,
            password_hash=hash_password(password),
            created_at_utc=utc_now(),
        )
    )
    match_ids = await MatchRepository(session).list_ids()
    await PredictionRepository(session).create_for_user(user.id, match_ids)
    logger.info("Registered user id=%s with %d predictions", user.id, len(match_ids))
    return user


async def authenticate(session: AsyncSession, username: str, password: str) -> Optional[User]:
    user = await UserRepository(session).get_by_username(username)
    if user is None or not check_password(password, user.password_hash):
        logger.info("Failed login for username=%r", username)
        return None
    return user
