"""FastAPI application entrypoint. No business logic; only wiring, middleware and error translation."""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.api.v1 import router as v1_router
from taskmanager.core.config import settings
from taskmanager.core.errors import HTTP_STATUS_BY_KIND, ErrorKind, ServiceError, kind_for_status
from taskmanager.core.logging import configure_logging
from taskmanager.core.tokens import get_token_service
from taskmanager.schemas.error import ErrorResponse

configure_logging(settings)
logger = logging.getLogger(__name__)

# Load the signing key at startup so a misconfigured secret fails the process, not a request.
get_token_service()

app = FastAPI(
    title="Task Manager API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(
    kind: ErrorKind,
    message: str,
    errors: dict[str, str] | None = None,
    status_code: int | None = None,
) -> JSONResponse:
    """Single translation point from error kind to HTTP status and body."""
    if status_code is None:
        status_code = HTTP_STATUS_BY_KIND[kind]
    body = ErrorResponse(
        kind=kind,
        message=message,
        status=status_code,
        timestamp=datetime.now(UTC),
        errors=errors,
    )
    headers = {"WWW-Authenticate": "Bearer"} if kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


@app.exception_handler(ServiceError)
async def handle_service_error(_request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(exc.kind, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing-level errors (unknown path, wrong method) get the same body as service errors."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = error_response(kind_for_status(exc.status_code), message, status_code=exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(loc) or "request"] = err.get("msg", "Invalid value")
    return error_response(ErrorKind.VALIDATION, "Validation failed", errors)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(ErrorKind.INTERNAL, "Unexpected error")


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Task Manager API"}
