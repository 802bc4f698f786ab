"""
HeroVault Backend - Database Engine Management
===============================================

What:  Async SQLAlchemy engine factory, session factory, and declarative base.
How:   `create_engine_from_settings()` builds an async engine with connection
       pooling; `create_session_factory()` wraps it for the document stores.
Who:   Called by the app factory (main.py) and by the test fixtures.
When:  Once per application instance; sessions are opened per store call.

Connection Pooling Strategy (server databases):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

SQLite (tests, local runs) gets a StaticPool instead, so every session in
the process talks to the same in-memory database.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from herovault.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every record table registers on this metadata; the app lifespan calls
    `Base.metadata.create_all` on startup.
    """
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database URL.

    Args:
        settings: Application settings (URL, pool sizing, log level).

    Returns:
        A ready AsyncEngine. No connection is opened until first use.
    """
    # Echo SQL queries in DEBUG mode
    echo = settings.log_level == "DEBUG"

    if settings.is_sqlite:
        return create_async_engine(
            settings.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned records stay readable after the
    # session that loaded them is closed
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    What:  Creates every registered table that does not exist yet.
    When:  Application startup (lifespan) and test fixtures.
    How:   Runs the sync `create_all` through `run_sync` on one connection.
    """
    # Model modules register their tables on Base.metadata when imported
    from herovault.models import character, image, superhero  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
