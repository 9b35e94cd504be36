"""
Pytest configuration and fixtures for devmarks tests.
"""

from typing import Any, AsyncGenerator

import asyncpg
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from devmarks.core.config import Settings
from devmarks.core.db import get_db
from devmarks.main import create_app


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings(**overrides: Any) -> Settings:
    """Return settings configured for testing."""
    values = dict(
        db_host="localhost",
        db_port=5432,
        db_user="devmarks",
        db_password="devmarks",
        db_name="devmarks_test",
        jwt_secret="test-secret",
    )
    values.update(overrides)
    return Settings(**values)


# =============================================================================
# In-memory store
# =============================================================================

class FakeDatabase:
    """
    Stands in for `devmarks.core.db.Database`.

    Understands exactly the statements issued by the repositories and keeps
    rows in plain lists. Every call is recorded in `calls`.
    """

    def __init__(self) -> None:
        self.users: list[dict] = []
        self.projects: list[dict] = []
        self.bookmarks: list[dict] = []
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: set[str] = set()

    def _check_failure(self, sql: str) -> None:
        for fragment in self.fail_on:
            if fragment in sql:
                raise asyncpg.PostgresError(f"forced failure on {fragment}")

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        self.calls.append((sql, args))
        self._check_failure(sql)

        if "INSERT INTO users" in sql:
            username, password, email = args
            if any(u["username"] == username for u in self.users):
                raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")
            row = {
                "id": len(self.users) + 1,
                "username": username,
                "password": password,
                "email": email,
                "created_on": None,
                "languages": None,
                "favorite_language": None,
                "frequency": None,
            }
            self.users.append(row)
            return {"id": row["id"]}

        if "FROM users" in sql:
            (username,) = args
            return next((dict(u) for u in self.users if u["username"] == username), None)

        if "INSERT INTO projects" in sql:
            name, author, language = args
            for p in self.projects:
                if (p["name"], p["author"], p["language"]) == (name, author, language):
                    return {"id": p["id"]}
            row = {"id": len(self.projects) + 1, "name": name, "author": author, "language": language}
            self.projects.append(row)
            return {"id": row["id"]}

        if "FROM projects" in sql:
            name, author, language = args
            for p in self.projects:
                if (p["name"], p["author"], p["language"]) == (name, author, language):
                    return {"id": p["id"]}
            return None

        if "INSERT INTO bookmarked_projects" in sql:
            user_id, project_id = args
            row = {"id": len(self.bookmarks) + 1, "user_id": user_id, "project_id": project_id}
            self.bookmarks.append(row)
            return {"id": row["id"]}

        raise AssertionError(f"unexpected statement: {sql}")

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self.calls.append((sql, args))
        self._check_failure(sql)

        if "FROM bookmarked_projects" in sql:
            (user_id,) = args
            by_id = {p["id"]: p for p in self.projects}
            return [dict(by_id[b["project_id"]]) for b in self.bookmarks if b["user_id"] == user_id]

        raise AssertionError(f"unexpected statement: {sql}")

    async def execute(self, sql: str, *args: Any) -> None:
        self.calls.append((sql, args))
        self._check_failure(sql)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return get_test_settings()


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def app(settings, fake_db):
    """Create FastAPI application backed by the in-memory store."""
    application = create_app(settings)
    application.dependency_overrides[get_db] = lambda: fake_db

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sample_user() -> dict:
    return {"username": "octocat", "password": "hunter2-hunter2", "email": "octocat@example.com"}


@pytest.fixture
def sample_project() -> dict:
    return {"name": "requests", "author": "psf", "language": "Python"}


@pytest_asyncio.fixture
async def unpooled_client(settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Client for an app whose database pool was never opened.

    Exceptions reaching the server are rendered by the app instead of
    being raised into the test.
    """
    application = create_app(settings)
    transport = ASGITransport(app=application, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
