"""
Core pytest configuration for the entire test suite.

Provides the database setup and HTTP client needed across repository,
service and API tests. Domain fixtures (repositories, services) live in
tests/test_fixtures/repository_fixtures.py and are re-exported at the bottom.

Every test gets its own in-memory SQLite database, created from the models and
loaded with the reference dataset (cities 1..10, events 1..4), so tests can
commit freely without leaking state into each other.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Silence noisy third-party loggers before they get imported.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from cityevents.config import get_settings
from cityevents.core.logging.builder import setup_logging
from cityevents.database.seed import create_schema, seed_reference_data
from cityevents.database.session import build_engine, get_async_session
from cityevents.main import create_app

settings = get_settings()

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# -------------------------------
# Logging
# -------------------------------
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's dictConfig once for the whole session so the
    formatters and filters the app relies on are active in every test.
    caplog attaches its own handler per test, after this runs.
    """
    setup_logging(settings)
    yield


@pytest.fixture()
def restore_logging():
    """
    For tests that call setup_logging() with their own settings: put the
    session configuration back afterwards.
    """
    yield
    setup_logging(settings)


# -------------------------------
# Database
# -------------------------------
@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    # StaticPool: every session shares the single in-memory connection
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def seeded(session_maker) -> None:
    async with session_maker() as session:
        await seed_reference_data(session)


@pytest.fixture()
async def db_session(session_maker, seeded) -> AsyncGenerator[AsyncSession, None]:
    """A session on the seeded database."""
    async with session_maker() as session:
        yield session
        await session.rollback()


# -------------------------------
# HTTP
# -------------------------------
@pytest.fixture()
async def client(session_maker, seeded) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    httpx client wired to a fresh app whose session dependency points at the
    test database. One session per request, as in production.
    """
    app = create_app(settings)

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _override_session

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# Repository / service fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    base_repo,
    city_repository,
    event_repository,
    city_service,
    event_service,
    create_city,
)
