import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.database import dispose_database, init_database
from core.logging import setup_logging
from routes.api_v1 import api_v1_router

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# Session cookie is sent cross-origin by the dev frontend.
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

app.include_router(api_v1_router)


@app.on_event("startup")
async def on_startup() -> None:
    """Open the database and create missing tables."""
    await init_database(settings.database_url, create_tables=True)
    logger.info("Application startup complete (env=%s, tz=%s)", settings.env, settings.timezone)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await dispose_database()
    logger.info("Application shutdown complete")


@app.get("/health")
async def health() -> dict:
    """Simple health check endpoint."""
    return {"status": "ok"}
