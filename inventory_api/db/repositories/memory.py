"""
In-memory repositories - test double and fallback when the database is unreachable.
Challenge: Consistent reads under concurrent writers (threads or coroutines).
Design: Reader/writer lock around a dict; entities are copied in and out so no caller
ever sees a half-applied mutation.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone

from inventory_api.core.exceptions import (
    DuplicateCodeError,
    DuplicateUsernameError,
    ItemNotFoundError,
    UserNotFoundError,
)
from inventory_api.db.repositories.interfaces import ItemRepository, UserRepository
from inventory_api.domain.models import Item, User


class ReadWriteLock:
    """Many concurrent readers or one writer. Writers are not starved by a stream of readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = ReadWriteLock()

    async def create(self, user: User) -> User:
        with self._lock.write():
            if any(u.username == user.username for u in self._users.values()):
                raise DuplicateUsernameError()
            now = datetime.now(timezone.utc)
            stored = replace(user, id=self._next_id, created_at=now, updated_at=now)
            self._users[stored.id] = stored
            self._next_id += 1
        user.id, user.created_at, user.updated_at = stored.id, stored.created_at, stored.updated_at
        return replace(stored)

    async def find_by_username(self, username: str) -> User:
        with self._lock.read():
            for user in self._users.values():
                if user.username == username:
                    return replace(user)
        raise UserNotFoundError()

    async def find_by_id(self, user_id: int) -> User:
        with self._lock.read():
            user = self._users.get(user_id)
            if user is None:
                raise UserNotFoundError()
            return replace(user)


class InMemoryItemRepository(ItemRepository):
    def __init__(self):
        self._items: dict[int, Item] = {}
        self._next_id = 1
        self._lock = ReadWriteLock()

    def _code_taken(self, code: str, exclude_id: int) -> bool:
        return any(i.code == code and i.id != exclude_id for i in self._items.values())

    async def save(self, item: Item) -> Item:
        with self._lock.write():
            # Re-checked under the write lock: closes the service's check-then-save gap
            if self._code_taken(item.code, 0):
                raise DuplicateCodeError()
            now = datetime.now(timezone.utc)
            stored = replace(item, id=self._next_id, created_at=now, updated_at=now)
            self._items[stored.id] = stored
            self._next_id += 1
            return replace(stored)

    async def update(self, item: Item) -> Item:
        with self._lock.write():
            existing = self._items.get(item.id)
            if existing is None:
                raise ItemNotFoundError()
            if self._code_taken(item.code, item.id):
                raise DuplicateCodeError()
            stored = replace(
                item,
                created_at=existing.created_at,
                created_by=existing.created_by,
                updated_at=datetime.now(timezone.utc),
            )
            self._items[item.id] = stored
            return replace(stored)

    async def find_by_id(self, item_id: int) -> Item:
        with self._lock.read():
            item = self._items.get(item_id)
            if item is None:
                raise ItemNotFoundError()
            return replace(item)

    async def find_all(self, status: str, limit: int, offset: int) -> tuple[list[Item], int]:
        with self._lock.read():
            matching = [i for i in self._items.values() if not status or i.status == status]
            total = len(matching)
            if offset >= total:
                return [], total
            matching.sort(key=lambda i: (i.updated_at, i.id), reverse=True)
            return [replace(i) for i in matching[offset:offset + limit]], total

    async def delete(self, item_id: int) -> None:
        with self._lock.write():
            if self._items.pop(item_id, None) is None:
                raise ItemNotFoundError()

    async def exists_by_code(self, code: str, exclude_id: int = 0) -> bool:
        with self._lock.read():
            return self._code_taken(code, exclude_id)
