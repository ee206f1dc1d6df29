from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.user_repo import UserRepository

from .config import get_settings
from .database import get_database_manager
from .session import read_session_token

LOGIN_URL = "/api/v1/auth/login"
LOGIN_REQUIRED_MESSAGE = "You must be logged in to play a game."


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager."""
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def _token_from_request(request: Request) -> Optional[str]:
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return None


def get_user_id(request: Request) -> Optional[int]:
    """Dependency: user id from the session cookie or bearer token, or None."""
    settings = get_settings()
    return read_session_token(
        _token_from_request(request),
        settings.session_secret,
        settings.session_max_age_seconds,
    )


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail={"message": LOGIN_REQUIRED_MESSAGE, "login_url": LOGIN_URL},
    )


async def require_user(
    user_id: Optional[int] = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Dependency: the logged-in User row; 401 when missing or unknown."""
    if user_id is None:
        raise unauthorized()
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise unauthorized()
    return user
