"""
Match window: which matches are "upcoming enough" to bet on, and day buckets.

Rules:
- Window is [start_of_day(now), start_of_day(now) + 48:59:59.999), with the day
  floor taken in the application timezone.
- Bucket key is "today" when the match starts on the local date of now,
  otherwise "tomorrow". Labels follow the key, not the group position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Generic, List, TypeVar

from core.clock import ensure_utc

BUCKET_TODAY = "today"
BUCKET_TOMORROW = "tomorrow"

BUCKET_LABELS = {
    BUCKET_TODAY: "Today",
    BUCKET_TOMORROW: "Tomorrow",
}

WINDOW_LENGTH = timedelta(hours=48, minutes=59, seconds=59, milliseconds=999)

T = TypeVar("T")


@dataclass(frozen=True)
class MatchWindow:
    """Half-open UTC interval [start, end)."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        moment = ensure_utc(moment)
        return self.start <= moment < self.end


@dataclass
class DayGroup(Generic[T]):
    key: str
    label: str
    items: List[T] = field(default_factory=list)


def start_of_day(now: datetime, tz: tzinfo = timezone.utc) -> datetime:
    """Local midnight of the day containing now, returned in UTC."""
    local = ensure_utc(now).astimezone(tz)
    midnight = datetime.combine(local.date(), time.min, tzinfo=tz)
    return midnight.astimezone(timezone.utc)


def compute_window(now: datetime, tz: tzinfo = timezone.utc) -> MatchWindow:
    start = start_of_day(now, tz)
    return MatchWindow(start=start, end=start + WINDOW_LENGTH)


def bucket_key(match_start: datetime, now: datetime, tz: tzinfo = timezone.utc) -> str:
    match_day = ensure_utc(match_start).astimezone(tz).date()
    today = ensure_utc(now).astimezone(tz).date()
    return BUCKET_TODAY if match_day == today else BUCKET_TOMORROW


def group_by_day(
    items: List[T],
    start_of: Callable[[T], datetime],
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> List[DayGroup[T]]:
    """Group items by bucket key, keeping input order and first-seen group order."""
    groups: dict[str, DayGroup[T]] = {}
    for item in items:
        key = bucket_key(start_of(item), now, tz)
        group = groups.get(key)
        if group is None:
            group = groups[key] = DayGroup(key=key, label=BUCKET_LABELS[key])
        group.items.append(item)
    return list(groups.values())
