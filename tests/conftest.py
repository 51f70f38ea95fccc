import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from feedesk.config import settings
from feedesk.db import init_db
from feedesk.main import app
from feedesk.seed import seed_admin


@pytest.fixture
async def db():
    """Fresh in-memory database with Beanie (and its unique indexes) initialised."""
    client = AsyncMongoMockClient()
    await init_db(client["feedesk_test"])
    yield


@pytest.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_headers(client):
    await seed_admin()
    resp = await client.post(
        "/api/auth/login",
        json={"staff_id": settings.default_admin_staff_id, "password": settings.default_admin_password},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
