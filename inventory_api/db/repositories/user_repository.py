"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Username uniqueness under concurrent registration (pre-check + DB constraint).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from inventory_api.core.exceptions import DuplicateUsernameError, StorageError, UserNotFoundError
from inventory_api.db.models.user import UserRecord
from inventory_api.db.repositories.base_repository import SqlRepository, as_utc, is_unique_violation
from inventory_api.db.repositories.interfaces import UserRepository
from inventory_api.domain.models import User

logger = logging.getLogger(__name__)


def _to_entity(record: UserRecord) -> User:
    return User(
        id=record.id,
        username=record.username,
        password_hash=record.password,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


class SqlUserRepository(SqlRepository[UserRecord], UserRepository):
    """User-specific queries over the users table."""

    def __init__(self, session_maker):
        super().__init__(session_maker, UserRecord)

    async def create(self, user: User) -> User:
        now = datetime.now(timezone.utc)
        record = UserRecord(
            username=user.username,
            password=user.password_hash,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.session("create user") as session:
                existing = await session.execute(
                    select(UserRecord.id).where(UserRecord.username == user.username)
                )
                if existing.scalar_one_or_none() is not None:
                    raise DuplicateUsernameError()
                session.add(record)
                await session.flush()  # Get ID without committing
                await session.refresh(record)
        except IntegrityError as exc:
            # Lost the race between the pre-check and the insert
            if is_unique_violation(exc):
                logger.info("username %r taken at insert time", user.username)
                raise DuplicateUsernameError() from exc
            raise StorageError(f"failed to create user: {exc}") from exc

        created = _to_entity(record)
        user.id = created.id
        user.created_at = created.created_at
        user.updated_at = created.updated_at
        return created

    async def find_by_username(self, username: str) -> User:
        """Find user by username - used for authentication."""
        async with self.session("find user by username") as session:
            result = await session.execute(select(UserRecord).where(UserRecord.username == username))
            record = result.scalar_one_or_none()
        if record is None:
            raise UserNotFoundError()
        return _to_entity(record)

    async def find_by_id(self, user_id: int) -> User:
        async with self.session("find user by id") as session:
            record = await self.get_record(session, user_id)
        if record is None:
            raise UserNotFoundError()
        return _to_entity(record)
