"""
Base repository - shared plumbing for SQL repositories (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, error wrapping at the store boundary, one session per call.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory_api.core.exceptions import AppError, StorageError
from inventory_api.db.base import Base
from inventory_api.db.session import session_scope

RecordType = TypeVar("RecordType", bound=Base)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Unique-constraint failure across SQLite / PostgreSQL / MySQL drivers."""
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in message or "duplicate" in message


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on read; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlRepository(Generic[RecordType]):
    """Generic async repository. Subclasses map records to domain entities."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], model: type[RecordType]):
        self.session_maker = session_maker
        self.model = model

    @asynccontextmanager
    async def session(self, action: str) -> AsyncGenerator[AsyncSession, None]:
        """Session for one operation. Driver errors are wrapped with context; domain errors pass."""
        try:
            async with session_scope(self.session_maker) as session:
                yield session
        except (AppError, IntegrityError):
            raise
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to {action}: {exc}") from exc

    async def get_record(self, session: AsyncSession, id: int) -> RecordType | None:
        """Fetch single row by primary key."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()
