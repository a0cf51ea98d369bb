"""Directory-backed store for uploaded image files.

Files are addressed by bare filename. Writes happen when a request stages
its uploads; deletes are best-effort and never raise, so a failed cleanup
can not change the outcome of the request that triggered it.
"""

import asyncio
import os
import secrets
import shutil
import time
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from fastapi import UploadFile

from src.portfolio.core.config import Settings
from src.portfolio.core.exceptions import UploadRejectedError
from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


def generate_filename(original: str | None) -> str:
    """Unique name per upload: ``<epoch ms>-<9 random digits><extension>``."""
    extension = Path(original or "").suffix.lower()
    suffix = secrets.randbelow(10**9)
    return f"{int(time.time() * 1000)}-{suffix}{extension}"


class FileStore:
    """Flat directory of uploaded files keyed by generated filename."""

    def __init__(
        self,
        directory: str | Path,
        max_file_size: int = 5 * 1024 * 1024,
        allowed_prefix: str = "image/",
    ):
        self.directory = Path(directory)
        self.max_file_size = max_file_size
        self.allowed_prefix = allowed_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileStore":
        return cls(
            settings.upload_dir,
            max_file_size=settings.max_upload_size_bytes,
            allowed_prefix=settings.allowed_image_prefix,
        )

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        """Resolve a filename inside the store.

        Raises:
            ValueError: If the name is empty or would escape the directory.
        """
        if not filename or filename != os.path.basename(filename) or filename in (".", ".."):
            raise ValueError(f"Invalid stored filename: {filename!r}")
        return self.directory / filename

    def exists(self, filename: str) -> bool:
        try:
            return self.path_for(filename).is_file()
        except ValueError:
            return False

    async def save(self, upload: UploadFile) -> str:
        """Stage an uploaded file and return its generated filename.

        Raises:
            UploadRejectedError: Not an image, or larger than the size limit.
        """
        content_type = upload.content_type or ""
        if not content_type.startswith(self.allowed_prefix):
            raise UploadRejectedError("Not an image! Please upload only images.")

        filename = generate_filename(upload.filename)
        await asyncio.to_thread(self._write, upload.file, self.path_for(filename))
        logger.debug("Staged upload", filename=filename, original=upload.filename)
        return filename

    def _write(self, source: BinaryIO, destination: Path) -> None:
        self.ensure_directory()
        written = 0
        out = destination.open("xb")
        try:
            with out:
                while chunk := source.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_file_size:
                        raise UploadRejectedError(
                            f"File too large. Maximum size is "
                            f"{self.max_file_size / (1024 * 1024):g}MB"
                        )
                    out.write(chunk)
        except BaseException:
            destination.unlink(missing_ok=True)
            raise

    async def delete(self, filename: str) -> None:
        """Delete one file. Absent files and I/O errors are logged, not raised."""
        try:
            path = self.path_for(filename)
        except ValueError:
            logger.warning("Refusing to delete file outside upload directory", filename=filename)
            return

        try:
            removed = await asyncio.to_thread(self._unlink, path)
        except Exception as e:
            logger.error("file_cleanup_failed", filename=filename, error=str(e))
            return

        if removed:
            logger.info("Deleted file", filename=filename)
        else:
            logger.debug("File already absent", filename=filename)

    @staticmethod
    def _unlink(path: Path) -> bool:
        if not path.exists():
            return False
        path.unlink(missing_ok=True)
        return True

    async def delete_all(self, filenames: Iterable[str | None]) -> None:
        """Delete each file in turn; one failure does not stop the rest."""
        for filename in filenames:
            if filename:
                await self.delete(filename)

    def is_writable(self) -> bool:
        """True when the upload directory exists and is writable."""
        try:
            self.ensure_directory()
        except OSError:
            return False
        return os.access(self.directory, os.W_OK) and shutil.disk_usage(self.directory).free > 0
