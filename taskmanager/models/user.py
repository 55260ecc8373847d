"""ORM model for principals (auth and ownership)."""

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from taskmanager.models.base import Base, utcnow
from taskmanager.models.enums import Role


class User(Base):
    """
    User account for JWT authentication and ownership-based access control.

    username and email are each unique; the unique indexes are the
    authoritative guard against concurrent duplicate writes.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=Role.REGULAR,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    tasks = relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
