"""Translation of domain errors into HTTP responses.

Routes let domain errors propagate; the handlers registered here turn them
into ``{"success": false, "error": <code>, "message": <text>}`` bodies.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chemwiki.domain.error import (
    AlreadyReportedError,
    DepthLimitExceededError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    StaleRecordError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    DepthLimitExceededError: status.HTTP_400_BAD_REQUEST,
    AlreadyReportedError: status.HTTP_400_BAD_REQUEST,
    StaleRecordError: status.HTTP_409_CONFLICT,
}


def error_body(code: str, message: str) -> dict[str, object]:
    return {"success": False, "error": code, "message": message}


def status_for(exc: DomainError) -> int:
    """HTTP status for a domain error, following its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Answer a domain error with its status and code."""
    status_code = status_for(exc)
    logfire.warn(
        "Request failed",
        method=request.method,
        path=request.url.path,
        error=exc.code,
        status_code=status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=status_code, content=error_body(exc.code, exc.message))


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI validation errors into one readable message."""
    parts = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = ".".join(str(part) for part in loc if part not in ("body", "query", "path"))
        field = field or "request"
        parts.append(f"{field}: {err.get('msg', 'Invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed bodies and query values with a 400 validation_error."""
    message = describe_validation_errors(exc)
    logfire.warn(
        "Request validation failed",
        method=request.method,
        path=request.url.path,
        message=message,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ValidationError.code, message),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer anything unexpected with a generic 500. Details stay in the logs."""
    logfire.exception(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "An unexpected error occurred"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on ``app``."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
