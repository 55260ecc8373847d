"""User endpoints: admin management plus self-service profile read/update."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskmanager.api.v1.auth import get_current_user
from taskmanager.core.database import get_db
from taskmanager.schemas.auth import CurrentPrincipal
from taskmanager.schemas.user import UserCreate, UserResponse, UserUpdate
from taskmanager.services import users as user_service

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> UserResponse:
    """Create a user with any role (admin only)."""
    return UserResponse.model_validate(user_service.create_user(db, caller, body))


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> list[UserResponse]:
    """List all users (admin only)."""
    return [UserResponse.model_validate(u) for u in user_service.list_users(db, caller)]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(db, caller, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> UserResponse:
    """Partially update a profile; omitted fields and an empty password are left unchanged."""
    return UserResponse.model_validate(user_service.update_user(db, caller, user_id, body))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentPrincipal, Depends(get_current_user)],
) -> Response:
    """Delete a user and all of its tasks (admin only)."""
    user_service.delete_user(db, caller, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
