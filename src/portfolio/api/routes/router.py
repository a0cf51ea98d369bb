from fastapi import APIRouter

from src.portfolio.api.routes import projects

api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router)
