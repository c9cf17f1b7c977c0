# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from inventory_api.db.repositories.interfaces import ItemRepository, UserRepository
from inventory_api.db.repositories.item_repository import SqlItemRepository
from inventory_api.db.repositories.memory import InMemoryItemRepository, InMemoryUserRepository
from inventory_api.db.repositories.user_repository import SqlUserRepository

__all__ = [
    "UserRepository",
    "ItemRepository",
    "SqlUserRepository",
    "SqlItemRepository",
    "InMemoryUserRepository",
    "InMemoryItemRepository",
]
