"""API v1: auth, game and meta endpoints."""

from fastapi import APIRouter

from .auth import router as auth_router
from .game import router as game_router
from .meta import router as meta_router

router = APIRouter(prefix="/api/v1")
router.include_router(auth_router)
router.include_router(game_router)
router.include_router(meta_router)

api_v1_router = router
