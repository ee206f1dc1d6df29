"""
Deterministic dev seed: teams, players, matches and a demo user.
Idempotent: upsert by PK (users by username); missing predictions are added.
Kickoffs are placed relative to the seed day so the upcoming listing has data.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.clock import app_timezone, ensure_utc, utc_now
from core.session import hash_password
from models.match import STAGE_GROUP, STAGE_PLAYOFF, Match
from models.player import Player
from models.prediction import Prediction
from models.team import Team
from models.user import User
from repositories.user_repo import UserRepository

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo1234"

FLAG_URL = "https://flagcdn.com/w80/{code}.png"

TEAMS: List[Dict[str, Any]] = [
    {"id": "arg", "name": "Argentina", "flag_code": "ar"},
    {"id": "pol", "name": "Poland", "flag_code": "pl"},
    {"id": "mex", "name": "Mexico", "flag_code": "mx"},
    {"id": "ksa", "name": "Saudi Arabia", "flag_code": "sa"},
    {"id": "fra", "name": "France", "flag_code": "fr"},
    {"id": "den", "name": "Denmark", "flag_code": "dk"},
]

# id, name, team_id
PLAYERS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Lionel Messi", "team_id": "arg"},
    {"id": 2, "name": "Julian Alvarez", "team_id": "arg"},
    {"id": 3, "name": "Robert Lewandowski", "team_id": "pol"},
    {"id": 4, "name": "Piotr Zielinski", "team_id": "pol"},
    {"id": 5, "name": "Hirving Lozano", "team_id": "mex"},
    {"id": 6, "name": "Raul Jimenez", "team_id": "mex"},
    {"id": 7, "name": "Salem Al-Dawsari", "team_id": "ksa"},
    {"id": 8, "name": "Saleh Al-Shehri", "team_id": "ksa"},
    {"id": 9, "name": "Kylian Mbappe", "team_id": "fra"},
    {"id": 10, "name": "Olivier Giroud", "team_id": "fra"},
    {"id": 11, "name": "Christian Eriksen", "team_id": "den"},
    {"id": 12, "name": "Martin Braithwaite", "team_id": "den"},
]

# Kickoff = local midnight of (seed day + day_offset) + hour.
# Playoff slots with no teams are decided later by an external process.
MATCHES: List[Dict[str, Any]] = [
    {"id": 1, "day_offset": -1, "hour": 20, "stage": STAGE_GROUP, "group": "C", "playoff": None,
     "home_team_id": "arg", "away_team_id": "ksa", "stadium": "Lusail Stadium"},
    {"id": 2, "day_offset": 0, "hour": 16, "stage": STAGE_GROUP, "group": "C", "playoff": None,
     "home_team_id": "mex", "away_team_id": "pol", "stadium": "Stadium 974"},
    {"id": 3, "day_offset": 0, "hour": 20, "stage": STAGE_GROUP, "group": "D", "playoff": None,
     "home_team_id": "fra", "away_team_id": "den", "stadium": "Al Janoub Stadium"},
    {"id": 4, "day_offset": 1, "hour": 20, "stage": STAGE_GROUP, "group": "C", "playoff": None,
     "home_team_id": "pol", "away_team_id": "arg", "stadium": "Stadium 974"},
    {"id": 5, "day_offset": 1, "hour": 20, "stage": STAGE_GROUP, "group": "C", "playoff": None,
     "home_team_id": "ksa", "away_team_id": "mex", "stadium": "Lusail Stadium"},
    {"id": 6, "day_offset": 4, "hour": 16, "stage": STAGE_PLAYOFF, "group": None, "playoff": "round-of-16",
     "home_team_id": None, "away_team_id": None, "stadium": "Khalifa International Stadium"},
    {"id": 7, "day_offset": 4, "hour": 20, "stage": STAGE_PLAYOFF, "group": None, "playoff": "round-of-16",
     "home_team_id": "fra", "away_team_id": None, "stadium": "Al Thumama Stadium"},
    {"id": 8, "day_offset": 9, "hour": 20, "stage": STAGE_PLAYOFF, "group": None, "playoff": "quarter-finals",
     "home_team_id": None, "away_team_id": None, "stadium": "Education City Stadium"},
]


def kickoff_for(row: Dict[str, Any], seed_now: datetime, tz: tzinfo) -> datetime:
    local_day = seed_now.astimezone(tz).date() + timedelta(days=row["day_offset"])
    local_kickoff = datetime.combine(local_day, time(hour=row["hour"]), tzinfo=tz)
    return local_kickoff.astimezone(timezone.utc)


async def seed_tournament(
    session: AsyncSession,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """
    Upsert teams, players, matches and the demo user with its predictions.
    Returns counts: teams_inserted, players_inserted, matches_inserted,
    users_inserted, predictions_inserted.
    """
    seed_now = ensure_utc(now) if now is not None else utc_now()
    tz = tz or app_timezone()
    counts = {
        "teams_inserted": 0,
        "players_inserted": 0,
        "matches_inserted": 0,
        "users_inserted": 0,
        "predictions_inserted": 0,
    }

    for row in TEAMS:
        if await session.get(Team, row["id"]) is None:
            session.add(Team(
                id=row["id"],
                name=row["name"],
                flag=FLAG_URL.format(code=row["flag_code"]),
            ))
            counts["teams_inserted"] += 1
    await session.flush()

    for row in PLAYERS:
        if await session.get(Player, row["id"]) is None:
            session.add(Player(id=row["id"], name=row["name"], team_id=row["team_id"]))
            counts["players_inserted"] += 1

    for row in MATCHES:
        if await session.get(Match, row["id"]) is None:
            session.add(Match(
                id=row["id"],
                start_date_utc=kickoff_for(row, seed_now, tz),
                stadium=row["stadium"],
                stage=row["stage"],
                group=row["group"],
                playoff=row["playoff"],
                home_team_id=row["home_team_id"],
                away_team_id=row["away_team_id"],
            ))
            counts["matches_inserted"] += 1
    await session.flush()

    users = UserRepository(session)
    demo = await users.get_by_username(DEMO_USERNAME)
    if demo is None:
        demo = await users.create(User(
            username=DEMO_USERNAME,
            password_hash=hash_password(DEMO_PASSWORD),
            created_at_utc=seed_now,
        ))
        counts["users_inserted"] += 1

    r = await session.execute(
        select(Prediction.match_id).where(Prediction.user_id == demo.id)
    )
    existing = set(r.scalars().all())
    for row in MATCHES:
        if row["id"] not in existing:
            session.add(Prediction(user_id=demo.id, match_id=row["id"]))
            counts["predictions_inserted"] += 1

    await session.commit()
    return counts
