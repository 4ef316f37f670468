"""Routes for managing projects and reading their activity feed."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from projtrack.application.use_cases.errors import NotFoundError
from projtrack.application.use_cases.projects import (
    create_project as create_project_uc,
    delete_project as delete_project_uc,
    get_project as get_project_uc,
    list_project_activity as list_project_activity_uc,
    list_projects as list_projects_uc,
    update_project as update_project_uc,
)
from projtrack.domain.entities import User
from projtrack.infrastructure.database import get_db
from projtrack.interfaces.api.dependencies import get_current_active_user
from projtrack.interfaces.api.schemas import (
    ActivityEventRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the projects of the authenticated user."""

    projects = list_projects_uc(db, user_id=current_user.id)
    return [ProjectRead.model_validate(project) for project in projects]


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        project = create_project_uc(
            db,
            user_id=current_user.id,
            name=project_in.name,
            description=project_in.description,
            stage=project_in.stage,
            start_date=project_in.start_date,
            end_date=project_in.end_date,
            repo_url=project_in.repo_url,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        project = get_project_uc(db, project_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ProjectRead.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Update the fields present in the request body."""

    try:
        project = update_project_uc(
            db,
            project_id,
            user_id=current_user.id,
            changes=project_in.model_dump(exclude_unset=True),
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Delete a project together with its milestones, tasks and activity."""

    try:
        delete_project_uc(db, project_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/activity", response_model=list[ActivityEventRead])
def read_project_activity(
    project_id: int,
    limit: int = Query(20, ge=1, le=100, description="Maximum number of events to return"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the mirrored GitHub activity of a project, newest first."""

    try:
        events = list_project_activity_uc(
            db, project_id, user_id=current_user.id, limit=limit
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [ActivityEventRead.model_validate(event) for event in events]


__all__ = ["router"]
