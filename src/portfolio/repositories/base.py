"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.portfolio.core.exceptions import InvalidIdentifierError, StorageFailureError
from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


def parse_id(value: UUID | str) -> UUID:
    """Turn a path parameter into a primary key.

    Raises:
        InvalidIdentifierError: If the value is not a UUID.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidIdentifierError(value) from e


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Each write is committed on its own, so a record is either fully stored
    or left untouched. Infrastructure errors are rolled back and surfaced
    as ``StorageFailureError``.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, id: UUID | str) -> ModelType | None:
        """Get a record by its primary key, or None."""
        pk = parse_id(id)
        try:
            result = await self.session.execute(
                select(self.model).where(self.model.id == pk)  # type: ignore[attr-defined]
            )
        except SQLAlchemyError as e:
            logger.error("Database read failed", model=self.model.__name__, error=str(e))
            raise StorageFailureError("Database read failed") from e
        return result.scalar_one_or_none()

    async def _commit(self, *refresh: Any) -> None:
        try:
            await self.session.commit()
            for entity in refresh:
                await self.session.refresh(entity)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database write failed", model=self.model.__name__, error=str(e))
            raise StorageFailureError("Database write failed") from e

    async def add(self, entity: ModelType) -> ModelType:
        """Insert and commit a new record."""
        self.session.add(entity)
        await self._commit(entity)
        return entity

    async def remove(self, entity: ModelType) -> None:
        """Delete and commit an existing record."""
        await self.session.delete(entity)
        await self._commit()
