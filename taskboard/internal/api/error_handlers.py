"""
Centralized exception handlers.

Every AppError is inspected by kind; anything else becomes a generic 500.
"""

from fastapi import FastAPI, Request, status as http_status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.core.errors import AppError, ErrorKind
from taskboard.core.logger import format_exception_short, logger
from taskboard.internal.api.utils import error_response, validation_error_response
from taskboard.internal.api.validators.task_validators import FieldError

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: http_status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ID: http_status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: http_status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE_UNAVAILABLE: http_status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INTERNAL: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def render_app_error(exc: AppError) -> JSONResponse:
    """Build the HTTP response for a typed application error."""
    status_code = STATUS_BY_KIND.get(exc.kind, http_status.HTTP_500_INTERNAL_SERVER_ERROR)

    if exc.kind is ErrorKind.VALIDATION:
        content = validation_error_response(exc.context.get("errors", []))
    elif exc.kind is ErrorKind.INVALID_ID:
        content = validation_error_response([FieldError("id", exc.message)])
    elif exc.kind is ErrorKind.NOT_FOUND:
        content = error_response("Task not found")
    elif exc.kind is ErrorKind.STORAGE_UNAVAILABLE:
        content = error_response("Storage unavailable")
    else:
        content = error_response("Internal server error")

    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the project's exception handlers to ``app``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Handle typed application errors."""
        if exc.kind in (ErrorKind.VALIDATION, ErrorKind.INVALID_ID, ErrorKind.NOT_FOUND):
            logger.warning(f"{request.method} {request.url.path}: {exc!r}")
        else:
            logger.error(format_exception_short(exc, f"{request.method} {request.url.path}"))
        return render_app_error(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing errors (unknown path, wrong method) as JSON."""
        logger.warning(f"HTTP {exc.status_code} for {request.method} {request.url.path}")
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        logger.error(format_exception_short(exc, "Unhandled exception"))
        logger.exception("Exception details:")
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response("Internal server error"),
        )
