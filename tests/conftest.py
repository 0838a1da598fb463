"""Test fixtures for the URL shortener."""

import os

# Settings are read once at import time, so the test environment has to be
# in place before anything from shortlink is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BASE_URL"] = "http://localhost:8080"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine

from shortlink.db.base import get_engine
from shortlink.main import app as main_app
from shortlink.repositories.url_repository import URLRepository

# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database engine for each test."""
    engine = get_engine(TEST_SQLALCHEMY_DATABASE_URL)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def url_repository(test_engine) -> URLRepository:
    """Return an initialized mapping store on the test engine."""
    repository = URLRepository(test_engine)
    await repository.initialize()
    return repository


@pytest.fixture
def test_app():
    """Return the FastAPI app, clearing dependency overrides afterwards."""
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return a TestClient; startup opens a fresh in-memory store."""
    with TestClient(test_app) as test_client:
        yield test_client
