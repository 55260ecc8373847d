"""SQLAlchemy ORM models."""

from taskmanager.models.base import Base
from taskmanager.models.enums import Role, TaskStatus
from taskmanager.models.task import Task
from taskmanager.models.user import User

__all__ = ["Base", "Role", "Task", "TaskStatus", "User"]
