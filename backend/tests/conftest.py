"""Shared fixtures: a throwaway SQLite database and an HTTP client bound to it."""

import time
from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from greatsage.db.session import create_tables, get_db_session, make_session_factory
from greatsage.main import app
from greatsage.models.user import User

from factories import OTHER_USER_ID, USER_ID


@pytest.fixture
def saigon_time(monkeypatch) -> Generator[None, None, None]:
    """Run the test with the process local time zone set to UTC+7."""
    monkeypatch.setenv("TZ", "Asia/Ho_Chi_Minh")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'greatsage.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        session.add_all([
            User(id=USER_ID, email="sage@localhost", name="Great Sage"),
            User(id=OTHER_USER_ID, email="other@localhost", name="Other"),
        ])
        await session.commit()
        yield session


@pytest.fixture
async def client(session_factory, db) -> AsyncGenerator[AsyncClient, None]:
    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

