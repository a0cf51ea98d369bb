"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.db import DBSession
from src.portfolio.repositories import ProjectRepository


def get_project_repository(session: DBSession) -> ProjectRepository:
    """Get project repository bound to the request session."""
    return ProjectRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
