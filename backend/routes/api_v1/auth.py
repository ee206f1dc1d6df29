"""Auth API: register, login, logout, current user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.dependencies import get_db_session, require_user
from core.session import make_session_token
from models.user import User
from services.auth_service import UsernameTakenError, authenticate, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)


def _user_dict(user: User) -> dict:
    return {"id": user.id, "username": user.username}


def _start_session(response: Response, user: User) -> str:
    settings = get_settings()
    token = make_session_token(user.id, settings.session_secret)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.env != "dev",
    )
    return token


@router.post("/register", status_code=201, summary="Create an account")
async def post_register(
    body: Credentials,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    try:
        user = await register_user(session, body.username.strip(), body.password)
    except UsernameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    token = _start_session(response, user)
    return {"token": token, "user": _user_dict(user)}


@router.post("/login", summary="Log in and receive a session cookie")
async def post_login(
    body: Credentials,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    user = await authenticate(session, body.username.strip(), body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    token = _start_session(response, user)
    return {"token": token, "user": _user_dict(user)}


@router.post("/logout", summary="Clear the session cookie")
async def post_logout(response: Response) -> dict:
    response.delete_cookie(get_settings().session_cookie_name)
    return {"success": True}


@router.get("/me", summary="Current user")
async def get_me(user: User = Depends(require_user)) -> dict:
    return {"user": _user_dict(user)}
