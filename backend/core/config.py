import os
from dataclasses import dataclass
from functools import lru_cache


def _default_database_url() -> str:
    """Default DB path: a SQLite file in the working directory."""
    return "sqlite+aiosqlite:///./app.db"


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "World Cup Predictor"
    env: str = "dev"
    database_url: str = ""  # set from from_env
    log_level: str = "INFO"
    session_secret: str = "dev-insecure-session-secret"
    session_cookie_name: str = "session"
    session_max_age_seconds: int = 60 * 60 * 24 * 30
    timezone: str = "UTC"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        db_url = os.getenv("DATABASE_URL") or _default_database_url()
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=db_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            session_secret=os.getenv("SESSION_SECRET", cls.session_secret),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", cls.session_cookie_name),
            session_max_age_seconds=int(
                os.getenv("SESSION_MAX_AGE_SECONDS", str(cls.session_max_age_seconds))
            ),
            timezone=os.getenv("APP_TIMEZONE", cls.timezone),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
