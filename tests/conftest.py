"""Pytest configuration and fixtures."""

import os
import time

# Cheap hashes for tests; must be set before settings are first loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from idea_pool.api.dependencies import get_session_cache
from idea_pool.config import get_settings
from idea_pool.database import Base, create_db_engine, get_db
from idea_pool.main import app
from idea_pool.services.auth import decode_access_token
from idea_pool.services.sessions import SessionCache


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's details."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        refresh_token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.refresh_token = refresh_token


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the cache uses."""

    def __init__(self):
        self._data: dict[str, tuple[bytes, float | None]] = {}
        self._offset = 0.0

    def _now(self) -> float:
        return time.monotonic() + self._offset

    def advance(self, seconds: float) -> None:
        """Move the fake clock forward."""
        self._offset += seconds

    def set(self, name, value, ex=None):
        expires_at = self._now() + ex if ex is not None else None
        self._data[name] = (str(value).encode(), expires_at)
        return True

    def get(self, name):
        entry = self._data.get(name)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._now() >= expires_at:
            del self._data[name]
            return None
        return value

    def delete(self, *names):
        removed = 0
        for name in names:
            if self._data.pop(name, None) is not None:
                removed += 1
        return removed

    def ttl(self, name):
        entry = self._data.get(name)
        if entry is None:
            return -2
        _, expires_at = entry
        if expires_at is None:
            return -1
        return int(expires_at - self._now())

    def close(self):
        pass


# Use test database - PostgreSQL when configured, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/idea_pool", "/idea_pool_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

VALID_USER = {"email": "email@test.com", "name": "Tester", "password": "Test1234"}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from idea_pool import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def fake_redis():
    """In-memory Redis with a controllable clock."""
    return FakeRedis()


@pytest.fixture
def session_cache(fake_redis):
    """Session cache over the fake Redis."""
    return SessionCache(fake_redis, ttl_seconds=get_settings().refresh_token_ttl_seconds)


@pytest.fixture(scope="function")
def client(db, session_cache):
    """Create a test client with database and session cache overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_cache] = lambda: session_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Sign up a user and return auth headers carrying their tokens."""

    def _signup(**overrides) -> AuthHeaders:
        user = {**VALID_USER, **overrides}
        response = client.post("/users", json=user)
        assert response.status_code == 201
        data = response.json()
        return AuthHeaders(
            {"X-Access-Token": data["access_token"]},
            user_id=decode_access_token(data["access_token"]),
            email=user["email"].strip().lower(),
            refresh_token=data["refresh_token"],
        )

    return _signup


@pytest.fixture
def auth_headers(signup):
    """Create a user and return auth headers with user info."""
    return signup()
