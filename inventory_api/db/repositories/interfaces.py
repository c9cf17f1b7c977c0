"""
Repository interfaces - what services depend on (SOLID: Dependency Inversion).
Two implementations each: SQL (persistent) and in-memory (test double / fallback).
"""

from abc import ABC, abstractmethod

from inventory_api.domain.models import Item, User


class UserRepository(ABC):
    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user; assigns id and timestamps. Raises DuplicateUsernameError."""

    @abstractmethod
    async def find_by_username(self, username: str) -> User:
        """Raises UserNotFoundError if absent."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> User:
        """Raises UserNotFoundError if absent."""


class ItemRepository(ABC):
    @abstractmethod
    async def save(self, item: Item) -> Item:
        """Insert a validated item; assigns id and timestamps. Raises DuplicateCodeError."""

    @abstractmethod
    async def update(self, item: Item) -> Item:
        """Replace all mutable fields by id. Raises ItemNotFoundError / DuplicateCodeError."""

    @abstractmethod
    async def find_by_id(self, item_id: int) -> Item:
        """Raises ItemNotFoundError if absent."""

    @abstractmethod
    async def find_all(self, status: str, limit: int, offset: int) -> tuple[list[Item], int]:
        """Page of items (most recently updated first) and the filtered total."""

    @abstractmethod
    async def delete(self, item_id: int) -> None:
        """Hard delete. Raises ItemNotFoundError if nothing was removed."""

    @abstractmethod
    async def exists_by_code(self, code: str, exclude_id: int = 0) -> bool:
        """True if any item other than `exclude_id` uses `code`."""
