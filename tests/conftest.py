import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="travelmarket-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import travelmarket.models  # noqa: E402,F401
from travelmarket.core.database import Base, SessionLocal, engine  # noqa: E402
from travelmarket.main import app  # noqa: E402

PASSWORD = "s3cret-pass"


@pytest_asyncio.fixture
async def db_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest_asyncio.fixture
async def session(db_schema):
    async with SessionLocal() as db:
        yield db


@pytest_asyncio.fixture
async def client(db_schema):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_and_login(client: AsyncClient, name: str, role: str = "general") -> dict:
    response = await client.post(
        "/api/auth/register",
        json={"email": f"{name}@example.com", "username": name, "password": PASSWORD, "role": role},
    )
    assert response.status_code == 201, response.text
    login = await client.post(
        "/api/auth/login",
        json={"email": f"{name}@example.com", "password": PASSWORD},
    )
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


async def create_provider(client: AsyncClient, name: str, provider_type: str = "guide") -> dict:
    headers = await register_and_login(client, name, role="provider")
    response = await client.post(
        "/api/me/provider-profile",
        json={"name": f"{name} tours", "provider_type": provider_type, "location": "Tashkent"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return {"id": response.json()["id"], "headers": headers}


@pytest_asyncio.fixture
async def provider(client):
    return await create_provider(client, "guide1")


@pytest_asyncio.fixture
async def traveller(client):
    return await register_and_login(client, "traveller1")
