"""Project lifecycle service.

Keeps the projects table and the upload directory in step:

- staged uploads are removed again when the record they were meant for
  is never written;
- replaced or deleted images are removed only after the record change that
  orphans them has been committed.

File removal goes through ``FileStore.delete_all``, which never raises, so
cleanup can not replace the result or the error the caller sees.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

from pydantic import ValidationError

from src.portfolio.core.exceptions import ProjectValidationError
from src.portfolio.core.logging import bind_project_context, get_logger
from src.portfolio.core.storage import FileStore
from src.portfolio.models import Project
from src.portfolio.repositories import ProjectRepository
from src.portfolio.schemas.project import ProjectCreate, ProjectUpdate

logger = get_logger(__name__)


@dataclass
class StagedFiles:
    """Uploads already written to the file store for the current request.

    ``other_images`` is None when the field was not sent at all, which is
    different from "replace with nothing".
    """

    main_image: str | None = None
    other_images: list[str] | None = None

    @property
    def filenames(self) -> list[str]:
        names = [self.main_image] if self.main_image else []
        return names + list(self.other_images or [])

    def __bool__(self) -> bool:
        return bool(self.filenames)


@dataclass
class _Snapshot:
    main_image: str | None
    other_images: list[str] = field(default_factory=list)


def _validation_error(exc: ValidationError) -> ProjectValidationError:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first['msg']}" if location else first["msg"]
    return ProjectValidationError(message, errors=exc.errors())


class ProjectService:
    """Create, update and delete projects together with their image files."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        file_store: FileStore,
        validate_on_update: bool = True,
    ):
        self.project_repo = project_repo
        self.file_store = file_store
        self.validate_on_update = validate_on_update

    async def list_projects(self) -> list[Project]:
        return await self.project_repo.list_all()

    async def get_project(self, project_id: UUID | str) -> Project:
        return await self.project_repo.get_by_id(project_id)

    async def create_project(
        self,
        fields: Mapping[str, str | None],
        staged: StagedFiles | None = None,
    ) -> Project:
        """Create a project from form fields and already-staged uploads.

        Args:
            fields: Text fields keyed by model attribute; missing or blank
                values take their documented defaults.
            staged: Uploads written to the file store for this request.

        Returns:
            The committed project.

        Raises:
            ProjectValidationError: A field violated the schema.
            StorageFailureError: The database write failed.

        Any failure removes every staged file before the original error
        is re-raised.
        """
        staged = staged or StagedFiles()
        try:
            try:
                data = ProjectCreate.model_validate(dict(fields))
            except ValidationError as e:
                raise _validation_error(e) from e

            project = Project(
                **data.model_dump(),
                main_image=staged.main_image,
                other_images=list(staged.other_images or []),
            )
            project = await self.project_repo.create(project)
        except Exception:
            await self._discard_staged(staged, reason="create_failed")
            raise

        logger.info(
            "Project created",
            project_id=str(project.id),
            image_count=len(project.image_filenames),
        )
        return project

    async def update_project(
        self,
        project_id: UUID | str,
        fields: Mapping[str, str | None],
        staged: StagedFiles | None = None,
    ) -> Project:
        """Apply a partial update, replacing image fields wholesale.

        Only supplied fields change. A staged main image replaces the stored
        one; staged other images replace the whole list. Old files are
        deleted after the commit, and only for the fields that were
        replaced. On any failure the staged files are deleted, the stored
        record and its files stay as they were, and the original error is
        re-raised.

        Raises:
            InvalidIdentifierError: project_id is not a valid id.
            ProjectNotFoundError: No project with this id.
            ProjectValidationError: A field violated the schema.
            StorageFailureError: The database write failed.
        """
        staged = staged or StagedFiles()
        bind_project_context(project_id)
        try:
            existing = await self.project_repo.get_by_id(project_id)
            old = _Snapshot(existing.main_image, list(existing.other_images or []))

            values: dict[str, object] = dict(self._parse_update(fields).changes())
            if staged.main_image:
                values["main_image"] = staged.main_image
            if staged.other_images is not None:
                values["other_images"] = list(staged.other_images)

            project = await self.project_repo.update_by_id(project_id, values)
        except Exception:
            await self._discard_staged(staged, reason="update_failed")
            raise

        # Committed: now the replaced files are orphans
        still_referenced = set(project.image_filenames)
        orphaned: list[str] = []
        if staged.main_image and old.main_image:
            orphaned.append(old.main_image)
        if staged.other_images is not None:
            orphaned.extend(old.other_images)
        orphaned = [name for name in orphaned if name not in still_referenced]

        if orphaned:
            await self.file_store.delete_all(orphaned)

        logger.info(
            "Project updated",
            project_id=str(project.id),
            fields=sorted(values),
            files_removed=len(orphaned),
        )
        return project

    async def delete_project(self, project_id: UUID | str) -> None:
        """Delete a project and then its image files.

        The record is removed first; file removal is best-effort afterwards,
        so the database never points at a file that is already gone.

        Raises:
            InvalidIdentifierError: project_id is not a valid id.
            ProjectNotFoundError: No project with this id.
            StorageFailureError: The database write failed.
        """
        bind_project_context(project_id)
        project = await self.project_repo.get_by_id(project_id)
        filenames = project.image_filenames

        await self.project_repo.delete_by_id(project.id)
        await self.file_store.delete_all(filenames)

        logger.info("Project deleted", project_id=str(project.id), files_removed=len(filenames))

    def _parse_update(self, fields: Mapping[str, str | None]) -> ProjectUpdate:
        supplied = {key: value for key, value in fields.items() if value is not None}
        if not self.validate_on_update:
            # Only constraint checks are skipped; blank still means "not supplied"
            stripped = {key: value.strip() for key, value in supplied.items()}
            return ProjectUpdate.model_construct(**{k: v for k, v in stripped.items() if v})
        try:
            return ProjectUpdate.model_validate(supplied)
        except ValidationError as e:
            raise _validation_error(e) from e

    async def _discard_staged(self, staged: StagedFiles, reason: str) -> None:
        if not staged:
            return
        logger.warning(
            "Removing staged uploads after failure",
            reason=reason,
            filenames=staged.filenames,
        )
        await self.file_store.delete_all(staged.filenames)
