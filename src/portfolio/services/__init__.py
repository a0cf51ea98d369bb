from src.portfolio.services.project_service import ProjectService, StagedFiles

__all__ = ["ProjectService", "StagedFiles"]
