"""Task endpoints. Owner-addressed routes live under /users/{user_id}/tasks, id-addressed ones under /tasks."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskmanager.api.v1.auth import get_current_user
from taskmanager.core.database import get_db
from taskmanager.schemas.auth import CurrentPrincipal
from taskmanager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskmanager.services import tasks as task_service

router = APIRouter()


@router.post(
    "/users/{user_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    user_id: int,
    body: TaskCreate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> TaskResponse:
    """Create a task owned by user_id. Callers may only create for themselves unless admin."""
    return TaskResponse.model_validate(task_service.create_task(db, caller, user_id, body))


@router.get("/users/{user_id}/tasks", response_model=list[TaskResponse])
def list_tasks_by_owner(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> list[TaskResponse]:
    tasks = task_service.list_tasks_by_owner(db, caller, user_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/tasks", response_model=list[TaskResponse])
def list_tasks(
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> list[TaskResponse]:
    """List every task (admin only)."""
    return [TaskResponse.model_validate(t) for t in task_service.list_tasks(db, caller)]


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> TaskResponse:
    return TaskResponse.model_validate(task_service.get_task(db, caller, task_id))


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    body: TaskUpdate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> TaskResponse:
    return TaskResponse.model_validate(task_service.update_task(db, caller, task_id, body))


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> Response:
    task_service.delete_task(db, caller, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
