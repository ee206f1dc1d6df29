"""
Request-scoped clock and timezone helpers.

All timestamps are stored and compared in UTC. Calendar questions ("which day
is today?") are answered in the configured application timezone.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from .config import get_settings


def utc_now() -> datetime:
    """Current instant, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def app_timezone() -> tzinfo:
    """Timezone used for day boundaries (APP_TIMEZONE, default UTC)."""
    name = get_settings().timezone
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def get_now() -> datetime:
    """FastAPI dependency: the frozen "now" for one request.

    Tests override this via app.dependency_overrides to pin the clock.
    """
    return utc_now()
