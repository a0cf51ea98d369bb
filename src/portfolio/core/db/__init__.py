"""Database utilities - engine, session, migrations."""

from src.portfolio.core.db.engine import (
    create_tables,
    dispose_engine,
    get_engine,
    set_engine,
)
from src.portfolio.core.db.migrations import run_migrations_async, run_migrations_sync
from src.portfolio.core.db.session import get_session

__all__ = [
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    "set_engine",
    # Session
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
