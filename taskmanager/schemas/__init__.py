"""Pydantic request/response schemas."""

from taskmanager.schemas.auth import (
    AuthResponse,
    CurrentPrincipal,
    LoginRequest,
    RegisterRequest,
)
from taskmanager.schemas.error import ErrorResponse
from taskmanager.schemas.health import HealthResponse
from taskmanager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskmanager.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "AuthResponse",
    "CurrentPrincipal",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
