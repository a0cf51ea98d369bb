"""Health check endpoint with dependency validation."""

import time
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.portfolio.core.config import get_settings
from src.portfolio.core.db import get_session
from src.portfolio.core.logging import get_logger
from src.portfolio.core.storage import FileStore

logger = get_logger(__name__)


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""

    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        """Report database and upload directory status."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "uploads": "unknown",
            "timestamp": time.time(),
        }

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            logger.warning("Database health check failed", error=str(e))
            health_status["database"] = f"unhealthy: {e!s}"
            health_status["status"] = "unhealthy"

        if FileStore.from_settings(get_settings()).is_writable():
            health_status["uploads"] = "healthy"
        else:
            health_status["uploads"] = "unhealthy: upload directory is not writable"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)
