"""Test helpers for service-level tests."""

from typing import Any
from uuid import UUID

from src.portfolio.core.exceptions import ProjectNotFoundError, StorageFailureError
from src.portfolio.models import Project
from src.portfolio.models.base import utc_now
from src.portfolio.repositories import parse_id
from src.portfolio.repositories.project import UPDATABLE_FIELDS


class InMemoryProjectRepository:
    """Dict-backed stand-in for ProjectRepository.

    Set ``fail_writes`` to make create/update/delete raise StorageFailureError
    without touching the stored records.
    """

    def __init__(self, *projects: Project):
        self.projects: dict[UUID, Project] = {p.id: p for p in projects}
        self.fail_writes = False

    def _check_writable(self) -> None:
        if self.fail_writes:
            raise StorageFailureError("Database write failed: connection reset")

    async def create(self, project: Project) -> Project:
        self._check_writable()
        project.created_at = project.created_at or utc_now()
        self.projects[project.id] = project
        return project

    async def list_all(self) -> list[Project]:
        return sorted(self.projects.values(), key=lambda p: p.created_at, reverse=True)

    async def get_by_id(self, project_id: UUID | str) -> Project:
        pk = parse_id(project_id)
        if pk not in self.projects:
            raise ProjectNotFoundError(project_id)
        return self.projects[pk]

    async def update_by_id(self, project_id: UUID | str, values: dict[str, Any]) -> Project:
        assert set(values) <= UPDATABLE_FIELDS
        project = await self.get_by_id(project_id)
        self._check_writable()
        for field, value in values.items():
            setattr(project, field, value)
        return project

    async def delete_by_id(self, project_id: UUID | str) -> None:
        project = await self.get_by_id(project_id)
        self._check_writable()
        del self.projects[project.id]
