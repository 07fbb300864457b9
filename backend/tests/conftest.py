"""
NoteApp Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own temporary data directory, so collection
       files never leak between tests.

Fixture Hierarchy (all function-scoped):
    ├── data_dir: Temporary directory standing in for ./data
    ├── test_settings: Settings pointing at data_dir
    ├── file_store: Fresh FileStore (fresh locks)
    ├── user_repo / note_repo: Repositories over file_store
    ├── test_app: create_app(test_settings)
    └── test_client: HTTPX AsyncClient bound to test_app (keeps cookies)
"""

import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Read by the settings singleton that backs the module-level noteapp.main.app
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SESSION_SECRET", "test-secret-not-real")

from noteapp.config import Settings  # noqa: E402
from noteapp.main import create_app  # noqa: E402
from noteapp.services.file_store import FileStore  # noqa: E402
from noteapp.services.note_service import NoteRepository  # noqa: E402
from noteapp.services.user_service import UserRepository  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    """A fresh data directory for each test (not created until first write)."""
    return tmp_path / "data"


@pytest.fixture
def test_settings(data_dir):
    return Settings(
        data_dir=str(data_dir),
        session_secret="test-secret-not-real",
        log_level="WARNING",
    )


@pytest.fixture
def file_store():
    return FileStore()


@pytest.fixture
def user_repo(file_store, test_settings):
    return UserRepository(file_store, test_settings.users_path)


@pytest.fixture
def note_repo(file_store, test_settings):
    return NoteRepository(file_store, test_settings.data_path)


@pytest.fixture
def test_app(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Redirects are NOT followed so tests can assert on 303 + Location.
    Cookies set by responses are kept, so a login carries over.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def register_and_login(client: AsyncClient, username: str = "alice", password: str = "secret"):
    """Create an account through the HTTP API and log in with it."""
    response = await client.post("/register", data={"username": username, "password": password})
    assert response.status_code == 303
    response = await client.post("/login", data={"username": username, "password": password})
    assert response.status_code == 303
    return response


@pytest_asyncio.fixture
async def logged_in_client(test_client):
    """test_client with user alice/secret registered and logged in."""
    await register_and_login(test_client)
    return test_client
