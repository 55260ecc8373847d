"""Typed service errors. Each carries an ErrorKind; the API boundary maps kinds to HTTP status."""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable, machine-readable error kinds returned to API clients."""

    VALIDATION = "VALIDATION"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL = "INTERNAL"


# Transport mapping used by the exception handlers in taskmanager.main.
HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.DUPLICATE_RESOURCE: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INTERNAL: 500,
}


def kind_for_status(status_code: int) -> ErrorKind:
    """Best ErrorKind for an HTTP status raised outside the service layer (routing, framework)."""
    for kind, code in HTTP_STATUS_BY_KIND.items():
        if code == status_code:
            return kind
    return ErrorKind.VALIDATION if status_code < 500 else ErrorKind.INTERNAL


class ServiceError(Exception):
    """Base for expected, typed failures raised by the service layer."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateResourceError(ServiceError):
    """Raised when a username or email is already taken."""

    kind = ErrorKind.DUPLICATE_RESOURCE


class NotFoundError(ServiceError):
    """Raised when a user or task id does not resolve."""

    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(ServiceError):
    """Raised for bad credentials and missing, malformed or expired tokens."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller fails the ownership or role check."""

    kind = ErrorKind.FORBIDDEN


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found with id: {user_id}")


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found with id: {task_id}")
