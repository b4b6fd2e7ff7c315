"""Database engine and session management."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated, Any

import structlog
from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from greatsage.config import get_settings
from greatsage.db.base import Base

logger = structlog.get_logger()


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the async engine on first use."""
    settings = get_settings()
    options: dict[str, Any] = {}
    # SQLite pools do not accept sizing arguments
    if not settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
        )
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.debug,
        **options,
    )


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return make_session_factory(get_engine())


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table known to the models metadata."""
    # Importing the package registers all models on Base.metadata
    import greatsage.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ensure_default_user(session: AsyncSession) -> None:
    """Insert the stand-in user every request acts as, if it is missing."""
    from greatsage.models.user import User

    user_id = get_settings().default_user_id
    if await session.get(User, user_id) is None:
        session.add(User(id=user_id, email="sage@localhost", name="Great Sage"))
        await session.commit()
        logger.info("default_user_created", user_id=user_id)


async def init_db() -> None:
    """Verify connectivity, optionally create the schema and seed the user."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    if get_settings().database_create_tables:
        await create_tables(engine)
        async with get_session_factory()() as session:
            await ensure_default_user(session)


async def close_db() -> None:
    """Close database connection pool."""
    await get_engine().dispose()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
