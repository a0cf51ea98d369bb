"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database (aiosqlite) shared through
a StaticPool, and a per-test upload directory.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.portfolio.core import db
from src.portfolio.core.config import get_settings
from src.portfolio.main import create_app


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with all tables."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_tables(test_engine)
    db.set_engine(test_engine)

    yield test_engine

    db.set_engine(None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for direct database checks."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def app(
    engine: AsyncEngine, upload_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[FastAPI]:
    """App wired to the test database and upload directory."""
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    monkeypatch.setenv("MAX_OTHER_IMAGES", "3")
    monkeypatch.setenv("MAX_UPLOAD_SIZE_BYTES", str(64 * 1024))
    get_settings.cache_clear()
    yield create_app()
    get_settings.cache_clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client calling the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
