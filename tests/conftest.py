"""Shared fixtures: the app wired to a throwaway SQLite database."""
import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from powerfolio.database import get_db
from powerfolio.main import app
from powerfolio.models.base import Base
from powerfolio.models.user import UserRole
from powerfolio.services.user_service import UserService


@pytest.fixture
def session_factory(tmp_path):
    # NullPool: every request opens its connection on the loop that serves it
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    # Not used as a context manager, so startup (which targets PostgreSQL) never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    return app.state.token_service


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, name="Alice", email="alice@example.com", password="secret-pw"):
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["token"], body["user"]


@pytest.fixture
def admin(client, session_factory):
    """An admin account created out of band, logged in through the API."""
    async def _create():
        async with session_factory() as session:
            await UserService(session).create_user(
                name="Root", email="admin@example.com", password="admin-pw", role=UserRole.ADMIN
            )

    asyncio.run(_create())
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "admin-pw"})
    assert response.status_code == 200, response.text
    body = response.json()
    return body["token"], body["user"]


SAMPLE_PROJECT = {
    "title": "Weather Dashboard",
    "description": "Forecasts on a map",
    "tech_stack": ["FastAPI", "React"],
    "github": "https://github.com/alice/weather",
    "thumbnail": "https://img.example.com/weather.png",
    "tags": ["maps"],
    "category": "web",
}


def create_project(client, token, **overrides):
    response = client.post("/api/projects", json={**SAMPLE_PROJECT, **overrides}, headers=auth_header(token))
    assert response.status_code == 201, response.text
    return response.json()["project"]
