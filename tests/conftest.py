"""Shared fixtures for the movie API test suite."""

import pytest
import httpx

from src.config.settings import get_settings
from src.logging.audit import get_audit_logger
from src.store.memory_store import MemoryStore
from src.store.models import User


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(STORE_BACKEND="memory", MIN_PASSWORD_LENGTH="10")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    # Always clear cache on teardown so other tests get fresh settings
    get_settings.cache_clear()


@pytest.fixture
async def memory_store() -> MemoryStore:
    """A connected, empty in-memory store."""
    store = MemoryStore()
    await store.connect()
    return store


@pytest.fixture
def sample_user() -> User:
    return User(fullname="Ada Lovelace", email="ada@example.com", password="analytical")


@pytest.fixture
def registration_body() -> dict:
    return {"fullname": "Ada Lovelace", "email": "ada@example.com", "password": "analytical"}


@pytest.fixture
def movie_body() -> dict:
    return {"title": "Alien", "genre": "Horror", "year": 1979, "cast": ["Sigourney Weaver"]}


@pytest.fixture
async def app_client(override_settings, memory_store):
    """httpx AsyncClient wired to the FastAPI app with the in-memory store injected."""
    override_settings(MIN_PASSWORD_LENGTH="8")
    from src.main import app, get_store

    app.dependency_overrides[get_store] = lambda: memory_store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_audit_logger():
    """Drop handlers installed by setup_logging so they don't outlive the test's stdout."""
    yield
    logger = get_audit_logger()
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
