"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
HTTP and database fixtures are in tests/integration/conftest.py.
"""

import os

# Set environment before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_AUTO_MIGRATE", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from src.portfolio.core.config import get_settings
from src.portfolio.core.storage import FileStore

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Empty upload directory for one test."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def file_store(upload_dir: Path) -> FileStore:
    """File store over the per-test upload directory, 1 KiB size limit."""
    return FileStore(upload_dir, max_file_size=1024)


@pytest.fixture
def stage_file(upload_dir: Path):
    """Write a file straight into the upload directory, as an upload would."""

    def _stage(name: str, content: bytes = b"\x89PNG fake image") -> str:
        (upload_dir / name).write_bytes(content)
        return name

    return _stage


@pytest.fixture
def captured_logs() -> Generator[list[dict]]:
    """Structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs
