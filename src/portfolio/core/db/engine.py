"""Database engine management."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from src.portfolio.core.config import get_settings

_engine: AsyncEngine | None = None


def _get_engine_options() -> dict[str, Any]:
    """Pool sizing applies to server databases only; SQLite uses its own pool."""
    settings = get_settings()
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **_get_engine_options())
    return _engine


def set_engine(engine: AsyncEngine | None) -> None:
    """Replace the engine singleton (tests, alternate bootstraps)."""
    global _engine
    _engine = engine


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all tables from model metadata when migrations are not used."""
    # Models must be imported so their tables are registered on the metadata
    from src.portfolio import models  # noqa: F401

    if engine is None:
        engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
