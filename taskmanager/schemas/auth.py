"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskmanager.models.enums import Role


class RegisterRequest(BaseModel):
    """Self-registration payload. role may only be REGULAR (or omitted)."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    role: Role | None = Field(default=None, description="Requested role; defaults to REGULAR")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class AuthResponse(BaseModel):
    """JWT access token returned after successful login or registration."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    username: str
    role: Role
    message: str


class CurrentPrincipal(BaseModel):
    """Authenticated caller (id, username, role) taken from verified token claims."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: Role
