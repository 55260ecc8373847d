"""Registration, JWT login, and the get_current_user dependency."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskmanager.core.database import get_db
from taskmanager.core.errors import UnauthorizedError
from taskmanager.core.tokens import TokenError, TokenService, get_token_service
from taskmanager.schemas.auth import (
    AuthResponse,
    CurrentPrincipal,
    LoginRequest,
    RegisterRequest,
)
from taskmanager.services import auth as auth_service

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Create a REGULAR account and return a bearer token for it."""
    user, token = auth_service.register(db, body, tokens)
    return AuthResponse(
        token=token,
        username=user.username,
        role=user.role,
        message="Registration successful!",
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = auth_service.login(db, body.username, body.password, tokens)
    return AuthResponse(
        token=token,
        username=user.username,
        role=user.role,
        message="Login successful!",
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentPrincipal:
    """
    Dependency: require a valid Bearer JWT and return the caller from its claims.

    The database is not consulted; a token stays valid until it expires even if
    the user is deleted or changes role in the meantime.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.info("Token rejected", extra={"token_error": e.kind.value})
        raise UnauthorizedError("Invalid or expired token") from e
    return CurrentPrincipal(id=claims.principal_id, username=claims.identifier, role=claims.role)
