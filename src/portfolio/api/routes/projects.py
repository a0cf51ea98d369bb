"""Project endpoints.

Create and update accept ``multipart/form-data``: text fields plus the
``mainImage`` (at most one) and ``otherImages`` file fields. Uploads are
staged by the ``stage_uploads`` dependency once the text fields have parsed,
before the service runs.
"""

from fastapi import APIRouter, status

from src.portfolio.api.dependencies import ProjectFormFields, ProjectServiceDep, StagedUploads
from src.portfolio.schemas.project import (
    ErrorResponse,
    MessageResponse,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Invalid id, field or upload"},
    404: {"model": ErrorResponse, "description": "Project not found"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project from form fields and uploaded images.",
    responses={k: v for k, v in ERROR_RESPONSES.items() if k != 404},
)
async def create_project(
    service: ProjectServiceDep,
    fields: ProjectFormFields,
    staged: StagedUploads,
) -> ProjectResponse:
    """Create a new project."""
    project = await service.create_project(fields, staged)
    return ProjectResponse(data=ProjectRead.model_validate(project))


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="List every project, newest first.",
)
async def list_projects(service: ProjectServiceDep) -> ProjectListResponse:
    """List all projects."""
    projects = await service.list_projects()
    return ProjectListResponse(
        count=len(projects),
        data=[ProjectRead.model_validate(p) for p in projects],
    )


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project",
    responses={k: v for k, v in ERROR_RESPONSES.items() if k != 500},
)
async def get_project(project_id: str, service: ProjectServiceDep) -> ProjectResponse:
    """Get a project by ID."""
    project = await service.get_project(project_id)
    return ProjectResponse(data=ProjectRead.model_validate(project))


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update project",
    description=(
        "Update supplied fields only. A new mainImage replaces the old one; "
        "new otherImages replace the whole list. Replaced files are deleted."
    ),
    responses=ERROR_RESPONSES,
)
async def update_project(
    project_id: str,
    service: ProjectServiceDep,
    fields: ProjectFormFields,
    staged: StagedUploads,
) -> ProjectResponse:
    """Update an existing project."""
    project = await service.update_project(project_id, fields, staged)
    return ProjectResponse(data=ProjectRead.model_validate(project))


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    description="Delete a project and its image files.",
    responses=ERROR_RESPONSES,
)
async def delete_project(project_id: str, service: ProjectServiceDep) -> MessageResponse:
    """Delete a project."""
    await service.delete_project(project_id)
    return MessageResponse(message="Project and associated files deleted successfully")
