"""Authenticator: self-registration and username/password login, both ending in a signed token."""

import logging

from sqlalchemy.orm import Session

from taskmanager.core.errors import ForbiddenError, UnauthorizedError
from taskmanager.core.security import burn_password_check, verify_password
from taskmanager.core.tokens import TokenService
from taskmanager.models import Role, User
from taskmanager.schemas.auth import RegisterRequest
from taskmanager.services.users import find_by_username, insert_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password!"


def register(db: Session, body: RegisterRequest, tokens: TokenService) -> tuple[User, str]:
    """
    Create a REGULAR user and return it with a fresh token.

    Self-registration never grants ADMIN; admins are created by another admin
    (POST /users) or with the create_user script.
    """
    if body.role is not None and body.role != Role.REGULAR:
        logger.warning("Rejected self-registration with elevated role", extra={"requested_role": body.role.value})
        raise ForbiddenError("Self-registration cannot request the ADMIN role")

    user = insert_user(db, body.username, str(body.email), body.password, Role.REGULAR)
    token = tokens.issue(user.username, user.role, principal_id=user.id)
    logger.info("User registered", extra={"user_id": user.id})
    return user, token


def login(db: Session, username: str, password: str, tokens: TokenService) -> tuple[User, str]:
    """
    Verify credentials and issue a token carrying the user's current role.

    Unknown username and wrong password raise the same UnauthorizedError, and
    both paths run one bcrypt verify.
    """
    user = find_by_username(db, username)
    if user is None:
        burn_password_check(password)
        logger.info("Login failed", extra={"reason": "unknown_user"})
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"reason": "bad_password", "user_id": user.id})
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    token = tokens.issue(user.username, user.role, principal_id=user.id)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return user, token
