"""Shared pytest fixtures: in-memory SQLite per test, seeded users, API client."""

import logging
import os

# configure before notevault.config is imported anywhere
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notevault.core import redis_client as redis_client_module  # noqa: E402
from notevault.core.models import BaseModel  # noqa: E402
from notevault.core.redis_client import RedisClient  # noqa: E402
from notevault.core.repositories.user_repository import UserRepository  # noqa: E402
from notevault.database import Database  # noqa: E402
from notevault.main import create_app  # noqa: E402
from notevault.security.jwt import create_access_token  # noqa: E402
from notevault.security.password import hash_password  # noqa: E402

TEST_PASSWORD = "Password123!"

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class FakeRedis:
    """Enough of redis.asyncio.Redis for the blacklist and health checks."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def exists(self, key):
        return int(key in self.store)

    async def ping(self):
        return True

    async def aclose(self):
        return None


@pytest.fixture(autouse=True)
def redis_client(monkeypatch):
    """Fresh, disconnected Redis client singleton per test."""
    client = RedisClient(url="redis://localhost:6379/15")
    monkeypatch.setattr(redis_client_module, "_redis_client", client)
    return client


@pytest.fixture
def fake_redis(redis_client):
    """Connect the singleton to an in-memory fake."""
    redis_client.redis = FakeRedis()
    return redis_client.redis


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow; hash once for every seeded user
    return hash_password(TEST_PASSWORD)


@pytest.fixture
async def engine():
    """SQLite in-memory engine, one database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces CASCADE / SET NULL with foreign keys on
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def database(engine):
    return Database("sqlite+aiosqlite:///:memory:", engine=engine)


@pytest.fixture
async def session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def make_user(session, password_hash):
    """Factory creating users that share TEST_PASSWORD."""

    async def _make_user(username, full_name=None):
        return await UserRepository(session).create_user(
            email=f"{username}@example.com",
            username=username,
            password_hash=password_hash,
            full_name=full_name,
        )

    return _make_user


@pytest.fixture
async def alice(make_user):
    return await make_user("alice", full_name="Alice Owner")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob")


@pytest.fixture
async def carol(make_user):
    return await make_user("carol")


@pytest.fixture
def headers_for():
    """Build bearer headers for a user."""

    def _headers_for(user) -> dict:
        token = create_access_token(user.id, user.email, user.username)
        return {"Authorization": f"Bearer {token}"}

    return _headers_for


@pytest.fixture
def alice_headers(alice, headers_for):
    return headers_for(alice)


@pytest.fixture
def bob_headers(bob, headers_for):
    return headers_for(bob)


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
async def client(app):
    """Async client bound to the app; lifespan is not run."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
