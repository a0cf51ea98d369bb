"""FastAPI dependency injection definitions."""

from src.portfolio.api.dependencies.db import DBSession, get_db_session
from src.portfolio.api.dependencies.forms import ProjectFormFields, project_form_fields
from src.portfolio.api.dependencies.repositories import ProjectRepo, get_project_repository
from src.portfolio.api.dependencies.services import ProjectServiceDep, get_project_service
from src.portfolio.api.dependencies.storage import (
    FileStoreDep,
    StagedUploads,
    get_file_store,
    stage_uploads,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ProjectRepo",
    "get_project_repository",
    # Forms
    "ProjectFormFields",
    "project_form_fields",
    # Storage
    "FileStoreDep",
    "StagedUploads",
    "get_file_store",
    "stage_uploads",
    # Services
    "ProjectServiceDep",
    "get_project_service",
]
