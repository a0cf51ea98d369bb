"""Repository for Project entity."""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.portfolio.core.exceptions import ProjectNotFoundError, StorageFailureError
from src.portfolio.core.logging import get_logger
from src.portfolio.models import Project
from src.portfolio.repositories.base import BaseRepository

logger = get_logger(__name__)

# Columns a caller may change after creation
UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description1",
        "description2",
        "project_type",
        "project_area",
        "project_location",
        "main_image",
        "other_images",
    }
)


class ProjectRepository(BaseRepository[Project]):
    """Repository for the projects collection."""

    model = Project

    async def create(self, project: Project) -> Project:
        """Persist a new project; id and created_at are assigned here."""
        return await self.add(project)

    async def list_all(self) -> list[Project]:
        """All projects, newest first. No pagination."""
        try:
            result = await self.session.execute(
                select(Project).order_by(Project.created_at.desc())  # type: ignore[attr-defined]
            )
        except SQLAlchemyError as e:
            logger.error("Database read failed", model="Project", error=str(e))
            raise StorageFailureError("Database read failed") from e
        return list(result.scalars().all())

    async def get_by_id(self, project_id: UUID | str) -> Project:
        """Get a project or raise.

        Raises:
            InvalidIdentifierError: project_id is not a UUID.
            ProjectNotFoundError: no project has this id.
        """
        project = await self.find_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def update_by_id(self, project_id: UUID | str, values: dict[str, Any]) -> Project:
        """Replace only the supplied fields and commit."""
        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        project = await self.get_by_id(project_id)
        for field, value in values.items():
            setattr(project, field, value)
        await self._commit(project)
        return project

    async def delete_by_id(self, project_id: UUID | str) -> None:
        project = await self.get_by_id(project_id)
        await self.remove(project)
