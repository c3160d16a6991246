import time
from collections.abc import AsyncGenerator, Iterable, Iterator
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from squadplan.database import drop_db, get_db, init_db
from squadplan.main import app
from squadplan.models.team import Team, TeamMember

test_engine = create_async_engine("sqlite+aiosqlite://", echo=False)
test_session = async_sessionmaker(test_engine, expire_on_commit=False)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


async def create_team(
    session: AsyncSession, team_id: int = 1, member_ids: Iterable[int] = (1, 2)
) -> Team:
    members = list(member_ids)
    team = Team(id=team_id, name="Test Team", owner_id=members[0] if members else 1)
    session.add(team)
    for user_id in members:
        session.add(TeamMember(team_id=team_id, user_id=user_id, is_coach=user_id == members[0]))
    await session.commit()
    return team


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    await init_db(test_engine)
    yield
    await drop_db(test_engine)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def shifted_local_clock(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Put the process local time zone on a different calendar date than UTC."""
    monkeypatch.setenv("TZ", "XYZ-13" if datetime.utcnow().hour >= 12 else "XYZ+12")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
