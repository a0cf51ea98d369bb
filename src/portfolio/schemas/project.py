"""Project schemas for API request/response.

``ProjectCreate`` and ``ProjectUpdate`` are the single source of truth for
which fields a project accepts, their defaults and their limits. Both are
fed from multipart form values, so blank strings count as "not supplied".
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.portfolio.models.project import (
    CLASSIFICATION_MAX_LENGTH,
    DEFAULT_CLASSIFICATION,
    DEFAULT_TITLE,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)

camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_or_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    model_config = camel_config

    title: str = Field(default=DEFAULT_TITLE, max_length=TITLE_MAX_LENGTH)
    description1: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    description2: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    project_type: str = Field(default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH)
    project_area: str = Field(default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH)
    project_location: str = Field(
        default=DEFAULT_CLASSIFICATION, max_length=CLASSIFICATION_MAX_LENGTH
    )

    @field_validator("title", mode="before")
    @classmethod
    def default_blank_title(cls, v: str | None) -> str:
        return _strip_or_none(v) or DEFAULT_TITLE

    @field_validator("project_type", "project_area", "project_location", mode="before")
    @classmethod
    def default_blank_classification(cls, v: str | None) -> str:
        return _strip_or_none(v) or DEFAULT_CLASSIFICATION

    @field_validator("description1", "description2", mode="before")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Unset fields keep their stored value."""

    model_config = camel_config

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description1: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    description2: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    project_type: str | None = Field(default=None, max_length=CLASSIFICATION_MAX_LENGTH)
    project_area: str | None = Field(default=None, max_length=CLASSIFICATION_MAX_LENGTH)
    project_location: str | None = Field(default=None, max_length=CLASSIFICATION_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("description1", "description2", mode="before")
    @classmethod
    def blank_description_is_unset(cls, v: str | None) -> str | None:
        return _strip_or_none(v)

    @field_validator("project_type", "project_area", "project_location", mode="before")
    @classmethod
    def strip_classification(cls, v: str | None) -> str | None:
        return _strip_or_none(v)

    def changes(self) -> dict[str, str]:
        """Fields the caller actually supplied, keyed by model attribute."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID
    title: str
    description1: str | None
    description2: str | None
    project_type: str
    project_area: str
    project_location: str
    main_image: str | None
    other_images: list[str]
    created_at: datetime


class ProjectResponse(BaseModel):
    success: bool = True
    data: ProjectRead


class ProjectListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ProjectRead]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    success: bool = False
    error: str
    request_id: str | None = None
