from fastapi import FastAPI

from .auth import router as auth_router
from .github import router as github_router
from .milestones import router as milestones_router
from .projects import router as projects_router
from .tasks import router as tasks_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(projects_router)
    app.include_router(milestones_router)
    app.include_router(tasks_router)
    app.include_router(github_router)
