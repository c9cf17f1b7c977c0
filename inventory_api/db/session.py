"""
Async database session management.
Challenge: Connection pooling, scoped sessions, proper cleanup.
Design: Engine built once at startup from Settings; repositories open one session per operation.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from inventory_api.config import Settings
from inventory_api.db.base import Base


def build_engine(settings: Settings) -> AsyncEngine:
    """Async engine with connection pool (scalability). SQLite gets the default pool."""
    options: dict = {"echo": settings.debug, "pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        options.update(pool_size=settings.db_pool_size, max_overflow=settings.db_max_overflow)
    return create_async_engine(settings.database_url, **options)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: one session per repository call."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session. Commit on success, rollback on error, close on exit."""
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine) -> None:
    """Dev/test shortcut for Alembic: create all tables from metadata."""
    import inventory_api.db.models  # noqa: F401 - ensure models are registered

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(engine: AsyncEngine) -> None:
    """Raise if the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


# Alembic runs synchronously; map each async driver to its sync counterpart
SYNC_DRIVERS = {"+asyncpg": "+psycopg2", "+aiosqlite": ""}


def sync_database_url(url: str) -> str:
    """Same database, sync driver. URLs without an async driver pass through unchanged."""
    for async_driver, sync_driver in SYNC_DRIVERS.items():
        if async_driver in url:
            return url.replace(async_driver, sync_driver, 1)
    return url
