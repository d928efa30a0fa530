"""
Pytest fixtures for the kiosk API.

Each test gets its own SQLite database file with the full schema, and an
HTTP client whose requests open sessions against it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

import kiosk.models  # noqa: F401
from kiosk.db.base import Base, build_engine, get_db
from kiosk.main import app


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'kiosk.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def _register(client: AsyncClient, email: str) -> dict:
    resp = await client.post("/auth/register", json={"email": email, "password": "SecurePass123!"})
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {
        "id": body["user_id"],
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }


@pytest.fixture
async def user_a(client):
    return await _register(client, "alice@example.com")


@pytest.fixture
async def user_b(client):
    return await _register(client, "bob@example.com")
