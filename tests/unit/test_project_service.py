"""Unit tests for ProjectService.

Uses a real FileStore on a temp directory and an in-memory repository, so
each test can check both the stored record and the files left on disk.
"""

from unittest.mock import AsyncMock, MagicMock, call
from uuid import uuid4

import pytest

from src.portfolio.core.exceptions import (
    InvalidIdentifierError,
    ProjectNotFoundError,
    ProjectValidationError,
    StorageFailureError,
)
from src.portfolio.core.storage import FileStore
from src.portfolio.models.project import DEFAULT_CLASSIFICATION, DEFAULT_TITLE
from src.portfolio.services import ProjectService, StagedFiles
from tests.factories import ProjectFactory
from tests.helpers import InMemoryProjectRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def repo() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def service(repo, file_store) -> ProjectService:
    return ProjectService(repo, file_store)


@pytest.fixture
def failing_unlink(monkeypatch):
    """Make every file deletion fail at the OS level."""

    def _fail(path):
        raise PermissionError("operation not permitted")

    monkeypatch.setattr(FileStore, "_unlink", staticmethod(_fail))


@pytest.fixture
async def bridge(service, stage_file):
    """The project from the walkthrough: a.jpg plus b.jpg, c.jpg."""
    for name in ("a.jpg", "b.jpg", "c.jpg"):
        stage_file(name)
    return await service.create_project(
        {"title": "Bridge"},
        StagedFiles(main_image="a.jpg", other_images=["b.jpg", "c.jpg"]),
    )


class TestCreate:
    async def test_create_references_staged_files(self, bridge, file_store, repo):
        assert bridge.title == "Bridge"
        assert bridge.main_image == "a.jpg"
        assert bridge.other_images == ["b.jpg", "c.jpg"]
        assert all(file_store.exists(n) for n in ("a.jpg", "b.jpg", "c.jpg"))
        assert bridge.id in repo.projects

    async def test_create_applies_defaults(self, service):
        project = await service.create_project({"title": None, "projectType": "  "})

        assert project.title == DEFAULT_TITLE
        assert project.project_type == DEFAULT_CLASSIFICATION
        assert project.project_area == DEFAULT_CLASSIFICATION
        assert project.project_location == DEFAULT_CLASSIFICATION
        assert project.description1 is None
        assert project.main_image is None
        assert project.other_images == []

    async def test_create_accepts_camel_case_fields(self, service):
        project = await service.create_project(
            {"projectArea": "400 m2", "projectLocation": "Porto"}
        )
        assert project.project_area == "400 m2"
        assert project.project_location == "Porto"

    async def test_create_failure_removes_all_staged_files(
        self, service, repo, file_store, stage_file
    ):
        """Every staged file is gone after the repository write fails."""
        names = [stage_file(n) for n in ("m.jpg", "o1.jpg", "o2.jpg", "o3.jpg")]
        repo.fail_writes = True

        with pytest.raises(StorageFailureError):
            await service.create_project(
                {"title": "Doomed"},
                StagedFiles(main_image="m.jpg", other_images=names[1:]),
            )

        assert not any(file_store.exists(n) for n in names)
        assert repo.projects == {}

    async def test_create_validation_error_removes_staged_files(
        self, service, file_store, stage_file
    ):
        stage_file("m.jpg")

        with pytest.raises(ProjectValidationError, match="title"):
            await service.create_project({"title": "x" * 101}, StagedFiles(main_image="m.jpg"))

        assert not file_store.exists("m.jpg")

    async def test_create_reraises_original_error_when_cleanup_fails(
        self, service, repo, stage_file, failing_unlink
    ):
        stage_file("m.jpg")
        repo.fail_writes = True

        with pytest.raises(StorageFailureError, match="connection reset"):
            await service.create_project({}, StagedFiles(main_image="m.jpg"))

    async def test_create_reraises_same_exception_object(self, file_store, stage_file):
        stage_file("m.jpg")
        error = RuntimeError("unexpected")
        repo = MagicMock()
        repo.create = AsyncMock(side_effect=error)
        service = ProjectService(repo, file_store)

        with pytest.raises(RuntimeError) as exc_info:
            await service.create_project({}, StagedFiles(main_image="m.jpg"))

        assert exc_info.value is error
        assert not file_store.exists("m.jpg")


class TestUpdate:
    async def test_title_only_preserves_everything_else(self, service, bridge, file_store):
        before = bridge.model_dump()

        updated = await service.update_project(bridge.id, {"title": "New Bridge"})

        assert updated.title == "New Bridge"
        after = updated.model_dump()
        for key in before:
            if key != "title":
                assert after[key] == before[key], key
        assert all(file_store.exists(n) for n in ("a.jpg", "b.jpg", "c.jpg"))

    async def test_none_fields_are_not_applied(self, service, bridge):
        updated = await service.update_project(
            str(bridge.id), {"title": None, "description1": None, "projectType": "Bridge"}
        )
        assert updated.title == "Bridge"
        assert updated.project_type == "Bridge"

    async def test_new_main_image_replaces_and_deletes_old(
        self, service, bridge, file_store, stage_file
    ):
        stage_file("new-main.jpg")

        updated = await service.update_project(
            bridge.id, {}, StagedFiles(main_image="new-main.jpg")
        )

        assert updated.main_image == "new-main.jpg"
        assert file_store.exists("new-main.jpg")
        assert not file_store.exists("a.jpg")
        # other images untouched
        assert updated.other_images == ["b.jpg", "c.jpg"]
        assert file_store.exists("b.jpg") and file_store.exists("c.jpg")

    async def test_new_other_images_replace_whole_list(
        self, service, bridge, file_store, stage_file
    ):
        stage_file("d.jpg")

        updated = await service.update_project(
            bridge.id, {}, StagedFiles(other_images=["d.jpg"])
        )

        assert updated.other_images == ["d.jpg"]
        assert updated.main_image == "a.jpg"
        assert file_store.exists("a.jpg")
        assert file_store.exists("d.jpg")
        assert not file_store.exists("b.jpg")
        assert not file_store.exists("c.jpg")

    async def test_main_image_added_to_project_without_one(
        self, service, repo, file_store, stage_file
    ):
        project = ProjectFactory.without_images()
        repo.projects[project.id] = project
        stage_file("first.jpg")

        updated = await service.update_project(
            project.id, {}, StagedFiles(main_image="first.jpg")
        )

        assert updated.main_image == "first.jpg"
        assert file_store.exists("first.jpg")

    async def test_not_found_removes_staged_files(self, service, file_store, stage_file):
        stage_file("orphan.jpg")

        with pytest.raises(ProjectNotFoundError):
            await service.update_project(uuid4(), {}, StagedFiles(main_image="orphan.jpg"))

        assert not file_store.exists("orphan.jpg")

    async def test_invalid_id_removes_staged_files(self, service, file_store, stage_file):
        stage_file("orphan.jpg")

        with pytest.raises(InvalidIdentifierError):
            await service.update_project(
                "not-a-valid-id", {}, StagedFiles(other_images=["orphan.jpg"])
            )

        assert not file_store.exists("orphan.jpg")

    async def test_write_failure_keeps_old_files_and_record(
        self, service, repo, bridge, file_store, stage_file
    ):
        stage_file("new-main.jpg")
        stage_file("d.jpg")
        repo.fail_writes = True

        with pytest.raises(StorageFailureError):
            await service.update_project(
                bridge.id,
                {"title": "Never saved"},
                StagedFiles(main_image="new-main.jpg", other_images=["d.jpg"]),
            )

        assert not file_store.exists("new-main.jpg")
        assert not file_store.exists("d.jpg")
        assert all(file_store.exists(n) for n in ("a.jpg", "b.jpg", "c.jpg"))
        stored = repo.projects[bridge.id]
        assert stored.title == "Bridge"
        assert stored.main_image == "a.jpg"

    async def test_validation_error_removes_staged_files(
        self, service, bridge, file_store, stage_file
    ):
        stage_file("d.jpg")

        with pytest.raises(ProjectValidationError):
            await service.update_project(
                bridge.id, {"title": "   "}, StagedFiles(other_images=["d.jpg"])
            )

        assert not file_store.exists("d.jpg")
        assert file_store.exists("b.jpg")

    async def test_validation_can_be_disabled(self, repo, file_store, bridge):
        relaxed = ProjectService(repo, file_store, validate_on_update=False)

        updated = await relaxed.update_project(bridge.id, {"title": "t" * 150})

        assert updated.title == "t" * 150

    async def test_relaxed_validation_still_ignores_blank_values(self, repo, file_store, bridge):
        relaxed = ProjectService(repo, file_store, validate_on_update=False)
        before = bridge.model_dump()

        updated = await relaxed.update_project(
            bridge.id,
            {"title": "", "description1": "  ", "project_type": "", "project_area": " Big "},
        )

        assert updated.title == before["title"]
        assert updated.description1 == before["description1"]
        assert updated.project_type == before["project_type"]
        assert updated.project_area == "Big"

    async def test_blank_description_keeps_stored_value(self, service, repo):
        project = ProjectFactory.without_images(description1="Steel arch")
        repo.projects[project.id] = project

        updated = await service.update_project(project.id, {"description1": ""})

        assert updated.description1 == "Steel arch"

    async def test_cleanup_failure_does_not_fail_update(
        self, service, bridge, stage_file, failing_unlink, captured_logs
    ):
        stage_file("new-main.jpg")

        updated = await service.update_project(
            bridge.id, {}, StagedFiles(main_image="new-main.jpg")
        )

        assert updated.main_image == "new-main.jpg"
        assert any(log["event"] == "file_cleanup_failed" for log in captured_logs)

    async def test_reuploaded_filename_still_referenced_is_kept(
        self, service, repo, file_store, stage_file
    ):
        project = ProjectFactory.build(main_image="m.jpg", other_images=["keep.jpg", "x.jpg"])
        repo.projects[project.id] = project
        for name in ("m.jpg", "keep.jpg", "x.jpg"):
            stage_file(name)

        updated = await service.update_project(
            project.id, {}, StagedFiles(other_images=["keep.jpg"])
        )

        assert updated.other_images == ["keep.jpg"]
        assert file_store.exists("keep.jpg")
        assert file_store.exists("m.jpg")
        assert not file_store.exists("x.jpg")


class TestDelete:
    async def test_delete_removes_record_and_all_files(self, service, repo, bridge, file_store):
        await service.delete_project(bridge.id)

        assert bridge.id not in repo.projects
        with pytest.raises(ProjectNotFoundError):
            await service.get_project(bridge.id)
        assert not any(file_store.exists(n) for n in ("a.jpg", "b.jpg", "c.jpg"))

    async def test_delete_project_without_images(self, service, repo):
        project = ProjectFactory.without_images()
        repo.projects[project.id] = project

        await service.delete_project(str(project.id))

        assert repo.projects == {}

    async def test_delete_not_found(self, service):
        with pytest.raises(ProjectNotFoundError):
            await service.delete_project(uuid4())

    async def test_delete_invalid_id(self, service):
        with pytest.raises(InvalidIdentifierError):
            await service.delete_project("not-a-valid-id")

    async def test_delete_succeeds_when_file_cleanup_fails(
        self, service, repo, bridge, file_store, failing_unlink
    ):
        await service.delete_project(bridge.id)

        assert bridge.id not in repo.projects
        # files remain as orphans, but the request outcome is unchanged
        assert file_store.exists("a.jpg")

    async def test_record_is_deleted_before_files(self):
        project = ProjectFactory.build()
        calls = MagicMock()
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=project)
        repo.delete_by_id = AsyncMock()
        store = MagicMock()
        store.delete_all = AsyncMock()
        calls.attach_mock(repo.delete_by_id, "delete_by_id")
        calls.attach_mock(store.delete_all, "delete_all")

        await ProjectService(repo, store).delete_project(project.id)

        assert calls.mock_calls == [
            call.delete_by_id(project.id),
            call.delete_all(project.image_filenames),
        ]

    async def test_failed_record_delete_keeps_files(self, service, repo, bridge, file_store):
        repo.fail_writes = True

        with pytest.raises(StorageFailureError):
            await service.delete_project(bridge.id)

        assert all(file_store.exists(n) for n in ("a.jpg", "b.jpg", "c.jpg"))


class TestRead:
    async def test_list_newest_first(self, service, repo):
        older = ProjectFactory.build()
        newer = ProjectFactory.build()
        newer.created_at = older.created_at.replace(year=older.created_at.year + 1)
        repo.projects = {older.id: older, newer.id: newer}

        projects = await service.list_projects()

        assert [p.id for p in projects] == [newer.id, older.id]

    async def test_get_project(self, service, bridge):
        assert (await service.get_project(str(bridge.id))).id == bridge.id
