# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

import pytest
import pytest_asyncio

from core.database import dispose_database, get_database_manager, init_database
from models.match import STAGE_GROUP, STAGE_PLAYOFF, Match
from models.player import Player
from models.prediction import Prediction
from models.team import Team
from models.user import User

FIXED_NOW = datetime(2022, 12, 1, 10, 0, 0, tzinfo=timezone.utc)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def test_db(tmp_path):
    """Fresh SQLite file per test with all tables created."""
    url = f"sqlite+aiosqlite:///{(tmp_path / 'test.db').as_posix()}"
    await init_database(url, create_tables=True)
    yield get_database_manager()
    await dispose_database()


@dataclass
class World:
    user_id: int
    other_user_id: int
    # match id -> prediction id of user
    predictions: dict
    other_prediction_id: int


# match id -> (start, stage, group, playoff, home, away)
MATCH_ROWS = {
    1: (_utc(2022, 12, 1, 18, 0), STAGE_GROUP, "C", None, "pol", "arg"),
    2: (_utc(2022, 12, 2, 20, 0), STAGE_GROUP, "C", None, "arg", "mex"),
    3: (_utc(2022, 12, 3, 0, 30), STAGE_GROUP, "C", None, "mex", "pol"),
    4: (_utc(2022, 12, 3, 9, 0), STAGE_GROUP, "C", None, "pol", "mex"),
    5: (_utc(2022, 11, 30, 20, 0), STAGE_GROUP, "C", None, "arg", "pol"),
    6: (_utc(2022, 12, 1, 0, 0), STAGE_GROUP, "C", None, "mex", "arg"),
    7: (_utc(2022, 12, 4, 16, 0), STAGE_PLAYOFF, None, "round-of-16", None, None),
    8: (_utc(2022, 12, 4, 20, 0), STAGE_PLAYOFF, None, "round-of-16", "pol", "arg"),
    9: (_utc(2022, 12, 9, 20, 0), STAGE_PLAYOFF, None, "quarter-finals", "arg", "pol"),
}


@pytest_asyncio.fixture
async def world(test_db) -> World:
    """Teams pol/arg/mex with two players each, nine matches around FIXED_NOW, two users."""
    async with test_db.session() as session:
        for tid, name in (("pol", "Poland"), ("arg", "Argentina"), ("mex", "Mexico")):
            session.add(Team(id=tid, name=name, flag=None if tid == "mex" else f"https://flags.test/{tid}.png"))
        await session.flush()
        session.add_all([
            Player(id=1, name="Robert Lewandowski", team_id="pol"),
            Player(id=2, name="Piotr Zielinski", team_id="pol"),
            Player(id=3, name="Lionel Messi", team_id="arg"),
            Player(id=4, name="Julian Alvarez", team_id="arg"),
            Player(id=5, name="Hirving Lozano", team_id="mex"),
            Player(id=6, name="Raul Jimenez", team_id="mex"),
        ])
        for mid, (start, stage, group, playoff, home, away) in MATCH_ROWS.items():
            session.add(Match(
                id=mid, start_date_utc=start, stadium=f"Stadium {mid}", stage=stage,
                group=group, playoff=playoff, home_team_id=home, away_team_id=away,
            ))
        user = User(username="alice", password_hash="x:y", created_at_utc=FIXED_NOW)
        other = User(username="bob", password_hash="x:y", created_at_utc=FIXED_NOW)
        session.add_all([user, other])
        await session.flush()

        predictions = {}
        for mid in MATCH_ROWS:
            p = Prediction(user_id=user.id, match_id=mid)
            session.add(p)
            await session.flush()
            predictions[mid] = p.id
        other_p = Prediction(user_id=other.id, match_id=1, home_team_score=1, away_team_score=1)
        session.add(other_p)
        await session.flush()
        return World(
            user_id=user.id,
            other_user_id=other.id,
            predictions=predictions,
            other_prediction_id=other_p.id,
        )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
