"""Reusable migration runner for both startup and the CLI."""

import asyncio
from pathlib import Path

from alembic import command
from alembic.config import Config

from src.portfolio.core.config import get_settings

ALEMBIC_DIR = Path(__file__).resolve().parents[3] / "alembic"


def get_alembic_config() -> Config:
    """Build an Alembic config that does not depend on the working directory."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    # ConfigParser interpolation treats % specially
    alembic_cfg.set_main_option(
        "sqlalchemy.url", get_settings().database_url.replace("%", "%%")
    )
    return alembic_cfg


def run_migrations_sync() -> None:
    """Upgrade the database schema to the latest revision."""
    command.upgrade(get_alembic_config(), "head")


async def run_migrations_async() -> None:
    """Run Alembic migrations from async context.

    The Alembic env starts its own event loop, so it runs in a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync)
