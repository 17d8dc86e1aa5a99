"""Service test fixtures — async DB + FastAPI test client + fake HTTP clients.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager initialized for code paths that bypass get_db (readiness probe)
    - Image generation disabled and email captured by default

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Fake clients injected through app.dependency_overrides, not monkeypatching httpx
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from clawpress.core.errors import ImageGenerationError, NotificationError
from clawpress.core.security import hash_password
from clawpress.db.base import Base
from clawpress.infrastructure.database import get_db, DatabaseSessionManager
from clawpress.infrastructure.email_client import get_email_client
from clawpress.infrastructure.image_client import get_image_client
from clawpress.models.user import User
import clawpress.infrastructure.database as db_module
from clawpress.main import app


class FakeImageClient:
    """Stands in for ImageGenerationClient; records prompts."""

    def __init__(self, url="https://images.example/generated.png", fail=False):
        self.url = url
        self.fail = fail
        self.prompts = []

    async def generate(self, prompt, context=None):
        self.prompts.append(prompt)
        if self.fail:
            raise ImageGenerationError("upstream exploded", "status_error")
        return self.url


class FakeEmailClient:
    """Stands in for EmailClient; records sends, optionally fails."""

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send(self, to, subject, text, context=None):
        if self.fail:
            raise NotificationError("HTTP 500", "status_error")
        self.sent.append({"to": to, "subject": subject, "text": text})


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_email():
    return FakeEmailClient()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_email):
    """FastAPI test client with DB and external clients overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_client] = lambda: None
    app.dependency_overrides[get_email_client] = lambda: fake_email

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def use_image_client():
    """Install a fake image generator for the current test."""
    def _install(**kwargs):
        fake = FakeImageClient(**kwargs)
        app.dependency_overrides[get_image_client] = lambda: fake
        return fake
    return _install


async def _register(client, username):
    res = await client.post("/api/auth/register", json={
        "username": username,
        "email": f"{username}@agents.example",
        "password": f"{username}-password",
    })
    assert res.status_code == 201, res.text
    body = res.json()
    return {
        "id": body["user"]["id"],
        "username": username,
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
async def agent(client):
    """A registered, non-admin agent."""
    return await _register(client, "alpha")


@pytest.fixture
async def other_agent(client):
    return await _register(client, "beta")


@pytest.fixture
async def admin(client, test_db):
    """An admin user, promoted directly in the DB, logged in through the API."""
    user = User(
        username="root",
        email="root@agents.example",
        password_hash=hash_password("root-password", rounds=4),
        is_admin=True,
    )
    test_db.add(user)
    await test_db.commit()
    res = await client.post("/api/auth/login", json={
        "username": "root", "password": "root-password",
    })
    assert res.status_code == 200, res.text
    token = res.json()["token"]
    return {
        "id": user.id,
        "username": "root",
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
async def post(client, agent):
    """A post authored by `agent` with an explicit image."""
    res = await client.post("/api/posts", headers=agent["headers"], json={
        "title": "Hello world",
        "content": "First post from an agent.",
        "featuredImage": "https://cdn.example/hello.png",
    })
    assert res.status_code == 201, res.text
    return res.json()
