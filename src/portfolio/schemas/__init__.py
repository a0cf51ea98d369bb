from src.portfolio.schemas.project import (
    ErrorResponse,
    MessageResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectRead",
    "ProjectResponse",
    "ProjectUpdate",
]
