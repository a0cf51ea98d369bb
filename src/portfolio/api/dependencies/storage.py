"""File store and upload staging dependencies."""

from typing import Annotated

from fastapi import Depends, File, UploadFile

from src.portfolio.api.dependencies.forms import ProjectFormFields
from src.portfolio.core.config import get_settings
from src.portfolio.core.exceptions import UploadRejectedError
from src.portfolio.core.storage import FileStore
from src.portfolio.services import StagedFiles


def get_file_store() -> FileStore:
    """Get the upload directory store from settings."""
    return FileStore.from_settings(get_settings())


FileStoreDep = Annotated[FileStore, Depends(get_file_store)]


def _present(uploads: list[UploadFile] | None) -> list[UploadFile]:
    # Browsers send an empty part for file inputs left blank
    return [upload for upload in uploads or [] if upload.filename]


async def stage_uploads(
    file_store: FileStoreDep,
    _fields: ProjectFormFields,
    main_image: Annotated[
        list[UploadFile] | None, File(alias="mainImage", description="Primary image")
    ] = None,
    other_images: Annotated[
        list[UploadFile] | None,
        File(alias="otherImages", description="Secondary images, in display order"),
    ] = None,
) -> StagedFiles:
    """Write the request's image uploads to the file store.

    Depends on the text fields, so nothing is written unless they parsed.
    If any file is rejected, files already written for this request are
    removed before the error propagates.

    Raises:
        UploadRejectedError: Not an image, too large, or too many files.
    """
    settings = get_settings()
    mains = _present(main_image)
    others = _present(other_images)

    if len(mains) > 1:
        raise UploadRejectedError("Only one mainImage may be uploaded")
    if len(others) > settings.max_other_images:
        raise UploadRejectedError(
            f"Too many otherImages. Maximum is {settings.max_other_images}"
        )

    staged = StagedFiles()
    written: list[str] = []
    try:
        if mains:
            staged.main_image = await file_store.save(mains[0])
            written.append(staged.main_image)
        if others:
            staged.other_images = []
            for upload in others:
                filename = await file_store.save(upload)
                written.append(filename)
                staged.other_images.append(filename)
    except Exception:
        await file_store.delete_all(written)
        raise
    return staged


StagedUploads = Annotated[StagedFiles, Depends(stage_uploads)]
