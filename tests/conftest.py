"""Shared fixtures: per-test SQLite databases, seeded users and API clients."""

import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from src.auth import hash_password
from src.config import settings
from src.db.repositories import UserRepository
from src.db.session import Database, get_db

ADMIN_PASSWORD = "admin-password"
EDITOR_PASSWORD = "editor-password"
READER_PASSWORD = "reader-password"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Cheap hashing, no rate limiting, default active coverage cap."""
    monkeypatch.setattr(settings.app, "bcrypt_rounds", 4)
    monkeypatch.setattr(settings.app, "rate_limit_enabled", False)
    monkeypatch.setattr(settings.app, "debug", False)
    monkeypatch.setattr(settings.live, "max_active_coverages", 3)
    monkeypatch.setattr(settings.live, "question_max_length", 1000)


def _sqlite_url(tmp_path, name: str) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / name}"


async def _seed_users(session) -> dict:
    repo = UserRepository(session)
    admin = await repo.create(
        username="admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        display_name="Claire Admin",
        role="admin",
    )
    editor = await repo.create(
        username="editor",
        password_hash=hash_password(EDITOR_PASSWORD),
        display_name="Jeanne Dupont",
        role="editor",
        title="Journaliste politique",
        avatar_url="https://cdn.example.org/jeanne.png",
        is_team_member=True,
    )
    reader = await repo.create(
        username="reader",
        password_hash=hash_password(READER_PASSWORD),
        display_name="Paul Lecteur",
        role="user",
    )
    return {"admin_id": admin.id, "editor_id": editor.id, "reader_id": reader.id}


# MARK: Async (engine / repository) fixtures

@pytest.fixture
async def database(tmp_path):
    database = Database(_sqlite_url(tmp_path, "engine.db"))
    await database.initialize()
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
async def users(session) -> SimpleNamespace:
    ids = await _seed_users(session)
    await session.commit()
    return SimpleNamespace(**ids)


# MARK: API fixtures

def run_with_session(database: Database, fn):
    """Run an async callable against a fresh session from a sync test."""
    async def _run():
        async with database.session() as session:
            return await fn(session)
    return asyncio.run(_run())


@pytest.fixture
def api(tmp_path):
    """
    API test context: a seeded SQLite database wired into the app.

    The application lifespan is not run; get_db is overridden instead.
    """
    from api.main import app

    database = Database(_sqlite_url(tmp_path, "api.db"))

    async def _prepare():
        await database.initialize()
        await database.create_tables()
        async with database.session() as session:
            return await _seed_users(session)

    ids = asyncio.run(_prepare())

    async def override_get_db():
        async with database.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    yield SimpleNamespace(app=app, database=database, **ids)

    app.dependency_overrides.clear()
    asyncio.run(database.close())


def _login(app, username: str, password: str) -> TestClient:
    client = TestClient(app)
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def anon_client(api) -> TestClient:
    return TestClient(api.app)


@pytest.fixture
def admin_client(api) -> TestClient:
    return _login(api.app, "admin", ADMIN_PASSWORD)


@pytest.fixture
def editor_client(api) -> TestClient:
    return _login(api.app, "editor", EDITOR_PASSWORD)


@pytest.fixture
def reader_client(api) -> TestClient:
    return _login(api.app, "reader", READER_PASSWORD)
