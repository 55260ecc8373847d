"""Request/response schemas for user management."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from taskmanager.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from taskmanager.models.enums import Role


class UserCreate(BaseModel):
    """Admin-initiated user creation; unlike self-registration, role may be ADMIN."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: Role = Role.REGULAR


class UserUpdate(BaseModel):
    """
    Partial update. Omitted or null fields are left unchanged.

    An empty password also means "do not change"; it never clears the password.
    """

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return v
        if not (PASSWORD_MIN_LEN <= len(v) <= PASSWORD_MAX_LEN):
            raise ValueError(
                f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters"
            )
        return v


class UserResponse(BaseModel):
    """Allow-listed projection of a user; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
