"""
Item API tests - REST CRUD, validation and error mapping (TDD).
Challenge: Ensure endpoints return correct status codes, headers and shape.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inventory_api.config import Settings
from inventory_api.db.session import create_tables
from inventory_api.main import create_app

ITEM = {"code": "SKU-001", "title": "Test Item", "description": "Desc", "price": 999, "stock": 4}


@pytest_asyncio.fixture
async def created_item(client: AsyncClient, auth_headers: dict) -> dict:
    response = await client.post("/api/v1/items", headers=auth_headers, json=ITEM)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_items_require_token(client: AsyncClient):
    response = await client.get("/api/v1/items")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["status"] == 401


@pytest.mark.asyncio
async def test_items_reject_bad_token(client: AsyncClient):
    response = await client.get("/api/v1/items", headers={"Authorization": "Bearer not.a.real.token"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_item(client: AsyncClient, auth_headers: dict, test_user):
    response = await client.post(
        "/api/v1/items", headers=auth_headers, json={**ITEM, "status": "INACTIVE"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "SKU-001"
    assert data["price"] == 999
    assert data["status"] == "ACTIVE"
    assert data["created_by"] == test_user.id
    assert data["updated_by"] == test_user.id
    assert "created_at" in data and "updated_at" in data


@pytest.mark.asyncio
async def test_create_item_zero_stock_is_inactive(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/items", headers=auth_headers, json={**ITEM, "stock": 0})
    assert response.status_code == 201
    assert response.json()["status"] == "INACTIVE"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, message",
    [
        ({**ITEM, "code": ""}, "code is required"),
        ({**ITEM, "price": 0}, "price must be greater than zero"),
        ({**ITEM, "stock": -1}, "stock cannot be negative"),
    ],
)
async def test_create_item_rule_violations(client: AsyncClient, auth_headers: dict, body, message):
    response = await client.post("/api/v1/items", headers=auth_headers, json=body)
    assert response.status_code == 400
    assert response.json()["error"] == message


@pytest.mark.asyncio
async def test_create_item_malformed_body(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/items", headers=auth_headers, json={"code": "X", "price": "lots"}
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("invalid request")


@pytest.mark.asyncio
async def test_create_item_duplicate_code(client: AsyncClient, auth_headers: dict, created_item):
    response = await client.post("/api/v1/items", headers=auth_headers, json=ITEM)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_get_item(client: AsyncClient, auth_headers: dict, created_item):
    response = await client.get(f"/api/v1/items/{created_item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["code"] == ITEM["code"]


@pytest.mark.asyncio
async def test_get_item_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/items/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "item not found"


@pytest.mark.asyncio
async def test_get_item_non_numeric_id(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/items/abc", headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_item(client: AsyncClient, auth_headers: dict, created_item):
    response = await client.put(
        f"/api/v1/items/{created_item['id']}",
        headers=auth_headers,
        json={**ITEM, "title": "Renamed", "stock": 0},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["status"] == "INACTIVE"
    assert data["created_at"] == created_item["created_at"]


@pytest.mark.asyncio
async def test_update_item_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.put("/api/v1/items/9999", headers=auth_headers, json=ITEM)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_item_to_taken_code(client: AsyncClient, auth_headers: dict, created_item):
    other = await client.post("/api/v1/items", headers=auth_headers, json={**ITEM, "code": "SKU-002"})
    response = await client.put(
        f"/api/v1/items/{other.json()['id']}", headers=auth_headers, json=ITEM
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_item(client: AsyncClient, auth_headers: dict, created_item):
    url = f"/api/v1/items/{created_item['id']}"
    response = await client.delete(url, headers=auth_headers)
    assert response.status_code == 204
    assert response.content == b""

    assert (await client.get(url, headers=auth_headers)).status_code == 404
    assert (await client.delete(url, headers=auth_headers)).status_code == 404


class TestListItems:
    @pytest_asyncio.fixture
    async def fifteen_items(self, client: AsyncClient, auth_headers: dict):
        for n in range(15):
            body = {**ITEM, "code": f"SKU-{n:03d}", "stock": n % 3}
            response = await client.post("/api/v1/items", headers=auth_headers, json=body)
            assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_empty_list(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/items", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"totalPages": 0, "data": []}

    @pytest.mark.asyncio
    async def test_paging_body_and_headers(self, client: AsyncClient, auth_headers: dict, fifteen_items):
        response = await client.get("/api/v1/items?page=2&limit=10", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["totalPages"] == 2
        assert len(body["data"]) == 5
        assert response.headers["X-Total-Count"] == "15"
        assert response.headers["X-Page"] == "2"
        assert response.headers["X-Per-Page"] == "10"
        assert response.headers["X-Total-Pages"] == "2"

    @pytest.mark.asyncio
    async def test_limit_above_service_cap_falls_back_to_default(
        self, client: AsyncClient, auth_headers: dict, fifteen_items
    ):
        response = await client.get("/api/v1/items?limit=50", headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 10
        assert response.headers["X-Per-Page"] == "10"

    @pytest.mark.asyncio
    async def test_status_filter(self, client: AsyncClient, auth_headers: dict, fifteen_items):
        response = await client.get("/api/v1/items?status=INACTIVE&limit=20", headers=auth_headers)
        data = response.json()["data"]
        assert len(data) == 5
        assert {i["status"] for i in data} == {"INACTIVE"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["status=archived", "limit=101", "limit=0", "page=0", "page=x"])
    async def test_bad_query_parameters(self, client: AsyncClient, auth_headers: dict, query):
        response = await client.get(f"/api/v1/items?{query}", headers=auth_headers)
        assert response.status_code == 400


@pytest.mark.asyncio
async def test_crud_against_sql_store(tmp_path):
    """Same flow end to end with the SQL repositories on SQLite."""
    settings = Settings(
        storage_backend="sql",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        jwt_secret="sql-test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
    )
    app = create_app(settings)
    engine = app.state.container.engine
    await create_tables(engine)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            creds = {"username": "sqluser", "password": "password123"}
            assert (await client.post("/register", json=creds)).status_code == 201
            token = (await client.post("/login", json=creds)).json()["token"]
            headers = {"Authorization": f"Bearer {token}"}

            created = await client.post("/api/v1/items", headers=headers, json=ITEM)
            assert created.status_code == 201
            assert (await client.post("/api/v1/items", headers=headers, json=ITEM)).status_code == 409

            listing = await client.get("/api/v1/items", headers=headers)
            assert listing.json()["totalPages"] == 1
            assert listing.headers["X-Total-Count"] == "1"

            ready = await client.get("/api/v1/health/ready")
            assert ready.json() == {"status": "ready", "backend": "sql"}

            item_url = f"/api/v1/items/{created.json()['id']}"
            assert (await client.delete(item_url, headers=headers)).status_code == 204
            assert (await client.get(item_url, headers=headers)).status_code == 404
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_page_size_bounds_come_from_app_settings():
    settings = Settings(
        storage_backend="memory",
        jwt_secret="page-size-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
        default_page_size=5,
        max_page_size=15,
    )
    app = create_app(settings)
    auth = app.state.container.auth_service
    await auth.register("pager", "password123")
    headers = {"Authorization": f"Bearer {await auth.login('pager', 'password123')}"}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        too_big = await client.get("/api/v1/items?limit=50", headers=headers)
        assert too_big.status_code == 400
        assert too_big.json()["error"] == "limit must be between 1 and 15"

        default = await client.get("/api/v1/items", headers=headers)
        assert default.status_code == 200
        assert default.headers["X-Per-Page"] == "5"

        at_cap = await client.get("/api/v1/items?limit=15", headers=headers)
        assert at_cap.status_code == 200
        assert at_cap.headers["X-Per-Page"] == "15"
