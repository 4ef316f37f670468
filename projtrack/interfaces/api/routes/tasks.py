"""Routes for the tasks of a milestone."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from projtrack.application.use_cases.errors import NotFoundError
from projtrack.application.use_cases.tasks import (
    create_task as create_task_uc,
    delete_task as delete_task_uc,
    get_task as get_task_uc,
    list_tasks as list_tasks_uc,
    update_task as update_task_uc,
)
from projtrack.domain.entities import User
from projtrack.infrastructure.database import get_db
from projtrack.interfaces.api.dependencies import get_current_active_user
from projtrack.interfaces.api.schemas import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(tags=["tasks"])


@router.get("/milestones/{milestone_id}/tasks", response_model=list[TaskRead])
def list_tasks(
    milestone_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the tasks of a milestone in board order."""

    try:
        tasks = list_tasks_uc(db, milestone_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [TaskRead.model_validate(task) for task in tasks]


@router.post(
    "/milestones/{milestone_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    milestone_id: int,
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = create_task_uc(
            db,
            milestone_id,
            user_id=current_user.id,
            title=task_in.title,
            type=task_in.type,
            status=task_in.status,
            description=task_in.description,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TaskRead.model_validate(task)


@router.get("/tasks/{task_id}", response_model=TaskRead)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = get_task_uc(db, task_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TaskRead.model_validate(task)


@router.patch("/tasks/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    task_in: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = update_task_uc(
            db,
            task_id,
            user_id=current_user.id,
            changes=task_in.model_dump(exclude_unset=True),
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TaskRead.model_validate(task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_task_uc(db, task_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
