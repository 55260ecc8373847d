"""User management: creation, lookup, partial update and cascading delete, gated by the ownership policy."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmanager.core.errors import DuplicateResourceError, UserNotFoundError
from taskmanager.core.security import hash_password
from taskmanager.models import Role, User
from taskmanager.schemas.auth import CurrentPrincipal
from taskmanager.schemas.user import UserCreate, UserUpdate
from taskmanager.services.policy import require_admin, require_owner_or_admin

logger = logging.getLogger(__name__)


def find_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def ensure_username_available(db: Session, username: str) -> None:
    if find_by_username(db, username) is not None:
        raise DuplicateResourceError("Username already exists")


def ensure_email_available(db: Session, email: str) -> None:
    if find_by_email(db, email) is not None:
        raise DuplicateResourceError("Email already exists")


def commit_or_duplicate(db: Session) -> None:
    """
    Commit the session, translating a unique-index violation into DuplicateResourceError.

    The pre-checks above only give friendly messages; two concurrent writers can
    both pass them, and the unique indexes decide.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Uniqueness constraint rejected write", extra={"error": type(e).__name__})
        raise DuplicateResourceError("Username or email already exists") from e


def insert_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: Role = Role.REGULAR,
) -> User:
    """Check both uniqueness constraints, then write a new user. No authorization check."""
    ensure_username_available(db, username)
    ensure_email_available(db, email)
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    commit_or_duplicate(db)
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role.value})
    return user


def create_user(db: Session, caller: CurrentPrincipal, body: UserCreate) -> User:
    """Admin-only creation path; the only API route that may create an ADMIN."""
    require_admin(caller)
    return insert_user(db, body.username, str(body.email), body.password, body.role)


def list_users(db: Session, caller: CurrentPrincipal) -> list[User]:
    require_admin(caller)
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, caller: CurrentPrincipal, user_id: int) -> User:
    require_owner_or_admin(caller, user_id, "You can only view your own profile!")
    return get_user_or_404(db, user_id)


def update_user(
    db: Session,
    caller: CurrentPrincipal,
    user_id: int,
    body: UserUpdate,
) -> User:
    """
    Apply a partial update.

    Uniqueness is re-checked only for values that actually change, and every
    check runs before any attribute is touched.
    """
    require_owner_or_admin(caller, user_id, "You can only update your own profile!")
    user = get_user_or_404(db, user_id)

    new_username = body.username
    new_email = str(body.email) if body.email is not None else None
    if new_username is not None and new_username != user.username:
        ensure_username_available(db, new_username)
    if new_email is not None and new_email != user.email:
        ensure_email_available(db, new_email)

    if new_username is not None:
        user.username = new_username
    if new_email is not None:
        user.email = new_email
    if body.password:
        user.password_hash = hash_password(body.password)

    commit_or_duplicate(db)
    db.refresh(user)
    return user


def delete_user(db: Session, caller: CurrentPrincipal, user_id: int) -> None:
    """Delete a user and every task it owns (admin only)."""
    require_admin(caller)
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id, "deleted_by": caller.id})
