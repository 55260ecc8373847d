"""Task CRUD. Every operation takes the caller and asks the ownership policy before acting."""

import logging

from sqlalchemy.orm import Session

from taskmanager.core.errors import TaskNotFoundError
from taskmanager.models import Task, TaskStatus
from taskmanager.schemas.auth import CurrentPrincipal
from taskmanager.schemas.task import TaskCreate, TaskUpdate
from taskmanager.services.policy import require_admin, require_owner_or_admin
from taskmanager.services.users import get_user_or_404

logger = logging.getLogger(__name__)


def _get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def get_task_owner_id(db: Session, task_id: int) -> int:
    """Resolve the owning user id; TaskNotFoundError if the task does not exist."""
    return _get_task_or_404(db, task_id).user_id


def create_task(
    db: Session,
    caller: CurrentPrincipal,
    owner_id: int,
    body: TaskCreate,
) -> Task:
    """Create a task for owner_id. Status defaults to TODO."""
    require_owner_or_admin(caller, owner_id, "You can only create tasks for yourself!")
    owner = get_user_or_404(db, owner_id)
    task = Task(
        title=body.title,
        description=body.description,
        status=body.status or TaskStatus.TODO,
        user_id=owner.id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task created", extra={"task_id": task.id, "owner_id": owner.id, "caller_id": caller.id})
    return task


def list_tasks(db: Session, caller: CurrentPrincipal) -> list[Task]:
    require_admin(caller)
    return db.query(Task).order_by(Task.id).all()


def list_tasks_by_owner(db: Session, caller: CurrentPrincipal, owner_id: int) -> list[Task]:
    require_owner_or_admin(caller, owner_id, "You can only view your own tasks!")
    owner = get_user_or_404(db, owner_id)
    return db.query(Task).filter(Task.user_id == owner.id).order_by(Task.id).all()


def get_task(db: Session, caller: CurrentPrincipal, task_id: int) -> Task:
    """Resolve the owner first (404), then apply the policy (403)."""
    owner_id = get_task_owner_id(db, task_id)
    require_owner_or_admin(caller, owner_id, "You can only view your own tasks!")
    return _get_task_or_404(db, task_id)


def update_task(
    db: Session,
    caller: CurrentPrincipal,
    task_id: int,
    body: TaskUpdate,
) -> Task:
    """Overwrite only the non-null fields of body."""
    owner_id = get_task_owner_id(db, task_id)
    require_owner_or_admin(caller, owner_id, "You can only update your own tasks!")
    task = _get_task_or_404(db, task_id)

    if body.title is not None:
        task.title = body.title
    if body.description is not None:
        task.description = body.description
    if body.status is not None:
        task.status = body.status

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, caller: CurrentPrincipal, task_id: int) -> None:
    owner_id = get_task_owner_id(db, task_id)
    require_owner_or_admin(caller, owner_id, "You can only delete your own tasks!")
    task = _get_task_or_404(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("Task deleted", extra={"task_id": task_id, "caller_id": caller.id})
