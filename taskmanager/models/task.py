"""ORM model for tasks owned by a single user."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from taskmanager.models.base import Base, utcnow
from taskmanager.models.enums import TaskStatus


class Task(Base):
    """A unit of work. Deleted together with its owner."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    status = Column(
        Enum(TaskStatus, name="task_status", native_enum=False, length=32),
        nullable=False,
        default=TaskStatus.TODO,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    owner = relationship("User", back_populates="tasks")
