"""Uniform error body returned by every failing endpoint."""

from datetime import datetime

from pydantic import BaseModel, Field

from taskmanager.core.errors import ErrorKind


class ErrorResponse(BaseModel):
    kind: ErrorKind = Field(..., description="Machine-readable error kind")
    message: str = Field(..., description="Human-readable message")
    status: int = Field(..., description="HTTP status code")
    timestamp: datetime
    errors: dict[str, str] | None = Field(
        default=None,
        description="Field -> message, only for VALIDATION errors",
    )
