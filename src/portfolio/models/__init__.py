"""Model exports.

Import from here: `from src.portfolio.models import Project`
"""

from src.portfolio.models.project import Project

__all__ = ["Project"]
