"""Repository layer - data access abstraction."""

from src.portfolio.repositories.base import BaseRepository, parse_id
from src.portfolio.repositories.project import ProjectRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "parse_id",
]
