"""Project model - the single persisted portfolio entry."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.portfolio.models.base import utc_now

DEFAULT_TITLE = "Untitled Project"
DEFAULT_CLASSIFICATION = "Not specified"

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 5000
CLASSIFICATION_MAX_LENGTH = 200
FILENAME_MAX_LENGTH = 255


class Project(SQLModel, table=True):
    """Portfolio project with references into the upload directory.

    ``main_image`` and ``other_images`` hold bare filenames, never paths.
    ``other_images`` keeps upload order, which is the display order.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(default=DEFAULT_TITLE, max_length=TITLE_MAX_LENGTH)
    description1: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    description2: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    project_type: str = Field(default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH)
    project_area: str = Field(default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH)
    project_location: str = Field(
        default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH
    )
    main_image: str | None = Field(default=None, max_length=FILENAME_MAX_LENGTH)
    other_images: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, index=True)

    @property
    def image_filenames(self) -> list[str]:
        """Every filename this record keeps alive in the upload directory."""
        names = [self.main_image] if self.main_image else []
        return names + list(self.other_images or [])
