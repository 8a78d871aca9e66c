"""Test fixtures for the URL shortener application."""

import os
import tempfile

# Settings are read at import time, so the test environment is set up first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["TOKEN_COLLISION_RETRIES"] = "0"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="shortl-test-logs-")

from typing import AsyncGenerator, Generator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortl.db.session import get_db
from shortl.main import app as main_app
from shortl.repositories.link_repository import LinkRepository
# Import models to ensure they're registered with SQLModel metadata
from shortl.models.link import Link  # noqa: F401


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory configured like the application's."""
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for a single test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def link_repository() -> LinkRepository:
    """Return link repository instance."""
    return LinkRepository()


@pytest.fixture
def override_get_db(session_factory):
    """Override the get_db dependency with sessions on the test database."""
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    return _override_get_db


@pytest.fixture
def test_app(override_get_db) -> Generator[FastAPI, None, None]:
    """FastAPI app wired to the test database."""
    main_app.dependency_overrides[get_db] = override_get_db
    yield main_app
    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(test_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client running the app on the test's event loop."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance for routes that never touch the store."""
    with TestClient(main_app) as test_client:
        yield test_client
    main_app.dependency_overrides.clear()
