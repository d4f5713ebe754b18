"""
Exception handlers - the single place errors become HTTP responses.

Expected failures (TaskManagerError) are rendered from their own code and
message. Anything else is logged with full context, reported to Sentry,
and answered with a generic 500 that leaks nothing.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskmanager.core.errors import (
    FieldError,
    TaskManagerError,
    TokenError,
    UnauthenticatedError,
    ValidationError,
)
from taskmanager.integrations.sentry import capture_exception

logger = logging.getLogger(__name__)


async def handle_task_manager_error(request: Request, exc: TaskManagerError) -> JSONResponse:
    headers = None
    if isinstance(exc, (TokenError, UnauthenticatedError)):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's schema errors in our field-error shape."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(FieldError(".".join(loc) or "body", err.get("msg", "Invalid value")))
    return await handle_task_manager_error(request, ValidationError(errors))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    capture_exception(exc, method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskManagerError, handle_task_manager_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
