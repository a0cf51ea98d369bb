"""Error taxonomy and exception handlers.

Every error response carries the same shape::

    {"success": false, "error": "<message>", "request_id": "<correlation id>"}
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)


class PortfolioError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProjectNotFoundError(PortfolioError):
    """No project exists for the given identifier."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, project_id: object):
        super().__init__("Project not found")
        self.project_id = project_id


class InvalidIdentifierError(PortfolioError):
    """The identifier is not structurally valid for the store."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: object):
        super().__init__("Invalid project ID")
        self.value = value


class ProjectValidationError(PortfolioError):
    """A field violated the project schema (length, blank title, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class UploadRejectedError(PortfolioError):
    """An uploaded file is not an image, is too large, or there are too many."""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageFailureError(PortfolioError):
    """The database failed for infrastructure reasons."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the structured error body."""

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                error=exc.message,
                error_type=type(exc).__name__,
                path=request.url.path,
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
