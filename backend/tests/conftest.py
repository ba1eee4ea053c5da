import os

os.environ.setdefault("SCHOOL_API_DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHOOL_API_JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from school_api import models  # noqa: F401  # Ensure tables are registered
from school_api.config import get_settings
from school_api.database import build_engine, get_session
from school_api.main import app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
async def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client):
    await client.post(
        "/register",
        json={"name": "Admin", "email": "admin@school.test", "password": "s3cret"},
    )
    response = await client.post("/login", json={"email": "admin@school.test", "password": "s3cret"})
    return {"Authorization": f"Bearer {response.json()['token']}"}
