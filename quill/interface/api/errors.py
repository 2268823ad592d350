"""Exception handlers mapping domain errors to HTTP responses.

Every error body has the shape ``{"error": str, "details"?: [{field, message}]}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quill.domain.error import (
    ConflictError,
    FieldError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)

# Leading location parts FastAPI adds to request validation errors
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def error_response(
    status_code: int, message: str, details: list[FieldError] | None = None
) -> JSONResponse:
    """Build a JSON error response."""
    content: dict = {"error": message}
    if details:
        content["details"] = [
            {"field": d.field, "message": d.message} for d in details
        ]
    return JSONResponse(status_code=status_code, content=content)


def request_validation_details(exc: RequestValidationError) -> list[FieldError]:
    """Convert FastAPI request validation errors to field errors.

    Field names are reported as the client sent them (camelCase aliases).
    A malformed JSON body is located by its decode position, reported as
    ``body``.
    """
    details = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        if loc and not isinstance(loc[0], str):
            loc = []
        loc = [str(part) for part in loc]
        details.append(
            FieldError(field=".".join(loc) or "body", message=error.get("msg", ""))
        )
    return details


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logfire.warn(
        "Validation failed",
        path=request.url.path,
        fields=[d.field for d in exc.details],
    )
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = request_validation_details(exc)
    logfire.warn(
        "Request validation failed",
        path=request.url.path,
        fields=[d.field for d in details],
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found")


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logfire.warn("Conflict", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_409_CONFLICT, str(exc))


async def handle_not_authorized(
    request: Request, exc: NotAuthorizedError
) -> JSONResponse:
    logfire.warn("Unauthorized admin request", path=request.url.path)
    return error_response(status.HTTP_401_UNAUTHORIZED, exc.reason)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception("Unhandled error", path=request.url.path, method=request.method)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(NotAuthorizedError, handle_not_authorized)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
