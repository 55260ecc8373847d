"""Ownership-or-admin authorization policy applied to every task and user operation."""

import logging

from taskmanager.core.errors import ForbiddenError
from taskmanager.models.enums import Role
from taskmanager.schemas.auth import CurrentPrincipal

logger = logging.getLogger(__name__)


def is_admin(caller: CurrentPrincipal) -> bool:
    if caller.role == Role.ADMIN:
        return True
    if caller.role == Role.REGULAR:
        return False
    raise ValueError(f"Unhandled role: {caller.role!r}")


def is_authorized(caller: CurrentPrincipal, resource_owner_id: int) -> bool:
    """
    Admins may act on any resource; everyone else only on resources they own.

    The role check runs first, so for admins the owner id is never compared
    (it may even point at a user that does not exist).
    """
    if is_admin(caller):
        return True
    return caller.id == resource_owner_id


def require_owner_or_admin(
    caller: CurrentPrincipal,
    resource_owner_id: int,
    message: str = "You can only access your own resources!",
) -> None:
    """Raise ForbiddenError unless is_authorized(caller, resource_owner_id)."""
    if not is_authorized(caller, resource_owner_id):
        logger.info(
            "Authorization denied",
            extra={"caller_id": caller.id, "resource_owner_id": resource_owner_id},
        )
        raise ForbiddenError(message)


def require_admin(caller: CurrentPrincipal, message: str = "Admin access required") -> None:
    """Raise ForbiddenError unless the caller has the ADMIN role."""
    if not is_admin(caller):
        logger.info("Admin access denied", extra={"caller_id": caller.id})
        raise ForbiddenError(message)
