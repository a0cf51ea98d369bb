from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.staticfiles import StaticFiles

from src.portfolio.api.middlewares import setup_middlewares
from src.portfolio.api.routes.router import api_router
from src.portfolio.core.config import get_settings
from src.portfolio.core.db import create_tables, dispose_engine, run_migrations_async
from src.portfolio.core.exceptions import setup_exception_handlers
from src.portfolio.core.health import setup_health_endpoint
from src.portfolio.core.logging import get_logger, setup_logging
from src.portfolio.core.storage import FileStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    FileStore.from_settings(settings).ensure_directory()

    if settings.database_auto_migrate:
        logger.info("Running database migrations")
        await run_migrations_async()
    else:
        await create_tables()

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Portfolio projects and their images"},
    {"name": "health", "description": "Service health"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio projects API with image uploads",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Uploaded files by filename; the directory may not exist until startup
    app.mount(
        settings.uploads_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    setup_health_endpoint(app)

    if settings.metrics_enabled:
        Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app).expose(
            app, endpoint="/metrics", include_in_schema=False
        )

    return app


app = create_app()
