"""
Composition root - wires settings, stores and services together once at startup.
Challenge: Pick the storage variant (SQL or in-memory) without services knowing which.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine

from inventory_api.config import DEFAULT_JWT_SECRET, Settings
from inventory_api.core.security import PasswordHasher, TokenIssuer
from inventory_api.db.repositories import (
    InMemoryItemRepository,
    InMemoryUserRepository,
    ItemRepository,
    SqlItemRepository,
    SqlUserRepository,
    UserRepository,
)
from inventory_api.db.session import build_engine, build_session_maker
from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    backend: str
    user_repo: UserRepository
    item_repo: ItemRepository
    auth_service: AuthService
    item_service: ItemService
    engine: AsyncEngine | None = None


def build_container(settings: Settings, backend: str | None = None) -> Container:
    """Build stores and services. `backend` overrides settings.storage_backend ("auto" -> sql)."""
    backend = backend or settings.storage_backend
    engine = None
    if backend == "memory":
        user_repo: UserRepository = InMemoryUserRepository()
        item_repo: ItemRepository = InMemoryItemRepository()
    else:
        engine = build_engine(settings)
        session_maker = build_session_maker(engine)
        user_repo = SqlUserRepository(session_maker)
        item_repo = SqlItemRepository(session_maker)

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT secret not configured, using default secret (NOT SAFE FOR PRODUCTION)")
    tokens = TokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expire_minutes),
    )
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    return Container(
        settings=settings,
        backend="memory" if engine is None else "sql",
        user_repo=user_repo,
        item_repo=item_repo,
        auth_service=AuthService(user_repo, hasher, tokens),
        item_service=ItemService(item_repo, max_page_size=settings.service_max_page_size),
        engine=engine,
    )
