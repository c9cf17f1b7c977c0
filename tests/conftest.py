"""
Pytest fixtures - stores, services, client, auth (TDD support).
Challenge: Isolated tests; every store test runs against both SQLite (SQL) and in-memory backends.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from inventory_api.config import Settings
from inventory_api.core.security import PasswordHasher, TokenIssuer
from inventory_api.db.repositories import (
    InMemoryItemRepository,
    InMemoryUserRepository,
    SqlItemRepository,
    SqlUserRepository,
)
from inventory_api.db.session import build_session_maker, create_tables
from inventory_api.main import create_app
from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService

TEST_SECRET = "test-secret-key-for-jwt-signing"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,  # bcrypt minimum; keeps the suite fast
        log_level="WARNING",
    )


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repos(request, tmp_path) -> AsyncGenerator[tuple, None]:
    """(user_repo, item_repo) for each backend. SQL runs on a throwaway SQLite file."""
    if request.param == "memory":
        yield InMemoryUserRepository(), InMemoryItemRepository()
        return
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    session_maker = build_session_maker(engine)
    yield SqlUserRepository(session_maker), SqlItemRepository(session_maker)
    await engine.dispose()


@pytest.fixture
def user_repo(repos):
    return repos[0]


@pytest.fixture
def item_repo(repos):
    return repos[1]


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def token_issuer(jwt_secret) -> TokenIssuer:
    return TokenIssuer(secret=jwt_secret)


@pytest.fixture
def auth_service(user_repo, hasher, token_issuer) -> AuthService:
    return AuthService(user_repo, hasher, token_issuer)


@pytest.fixture
def item_service(item_repo) -> ItemService:
    return ItemService(item_repo)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(app):
    return await app.state.container.auth_service.register("tester", "password123")


@pytest_asyncio.fixture
async def auth_headers(app, test_user) -> dict:
    token = await app.state.container.auth_service.login("tester", "password123")
    return {"Authorization": f"Bearer {token}"}
