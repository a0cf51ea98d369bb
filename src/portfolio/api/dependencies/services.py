"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.repositories import ProjectRepo
from src.portfolio.api.dependencies.storage import FileStoreDep
from src.portfolio.core.config import get_settings
from src.portfolio.services import ProjectService


def get_project_service(project_repo: ProjectRepo, file_store: FileStoreDep) -> ProjectService:
    """Get project service with repository and file store."""
    return ProjectService(
        project_repo,
        file_store,
        validate_on_update=get_settings().validate_on_update,
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
