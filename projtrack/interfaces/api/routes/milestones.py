"""Routes for the milestones of a project."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from projtrack.application.use_cases.errors import NotFoundError
from projtrack.application.use_cases.milestones import (
    create_milestone as create_milestone_uc,
    delete_milestone as delete_milestone_uc,
    get_milestone as get_milestone_uc,
    list_milestones as list_milestones_uc,
    update_milestone as update_milestone_uc,
)
from projtrack.domain.entities import User
from projtrack.infrastructure.database import get_db
from projtrack.interfaces.api.dependencies import get_current_active_user
from projtrack.interfaces.api.schemas import (
    MilestoneCreate,
    MilestoneRead,
    MilestoneUpdate,
)

router = APIRouter(tags=["milestones"])


@router.get("/projects/{project_id}/milestones", response_model=list[MilestoneRead])
def list_milestones(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the milestones of a project with their tasks."""

    try:
        milestones = list_milestones_uc(db, project_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [MilestoneRead.model_validate(milestone) for milestone in milestones]


@router.post(
    "/projects/{project_id}/milestones",
    response_model=MilestoneRead,
    status_code=status.HTTP_201_CREATED,
)
def create_milestone(
    project_id: int,
    milestone_in: MilestoneCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        milestone = create_milestone_uc(
            db,
            project_id,
            user_id=current_user.id,
            title=milestone_in.title,
            description=milestone_in.description,
            start_date=milestone_in.start_date,
            end_date=milestone_in.end_date,
            status=milestone_in.status,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return MilestoneRead.model_validate(milestone)


@router.get("/milestones/{milestone_id}", response_model=MilestoneRead)
def read_milestone(
    milestone_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        milestone = get_milestone_uc(db, milestone_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MilestoneRead.model_validate(milestone)


@router.patch("/milestones/{milestone_id}", response_model=MilestoneRead)
def update_milestone(
    milestone_id: int,
    milestone_in: MilestoneUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        milestone = update_milestone_uc(
            db,
            milestone_id,
            user_id=current_user.id,
            changes=milestone_in.model_dump(exclude_unset=True),
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return MilestoneRead.model_validate(milestone)


@router.delete("/milestones/{milestone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_milestone(
    milestone_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_milestone_uc(db, milestone_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
