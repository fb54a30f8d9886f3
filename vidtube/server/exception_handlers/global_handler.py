"""
Exception Handlers for the FastAPI Application.

Every failure leaves the API in the same shape::

    {"status_code": 404, "data": null, "message": "...", "success": false, "errors": []}

Handled exception types, most specific first:
- ``ApiError``: raised by routers and dependencies; carries status and errors
- ``MediaStorageError``: storage provider failures, rendered as 502
- ``RequestValidationError``: malformed request bodies/params, rendered as 422
- Starlette ``HTTPException``: framework errors such as 404 for unknown routes
- ``Exception``: anything else, logged with an error ID and rendered as 500
"""

import traceback
from typing import Any, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.media import MediaStorageError
from vidtube.core.models.io import ErrorResponse
from vidtube.core.monitoring import log_error

logger = get_logger(__name__)


def error_response(
    status_code: int,
    message: str,
    errors: Optional[List[Any]] = None,
    headers: Optional[dict] = None,
    **extra: Any,
) -> JSONResponse:
    """Build the standard error envelope."""
    envelope = ErrorResponse(status_code=status_code, message=message, errors=jsonable_encoder(errors or []))
    content = {**envelope.model_dump(), **extra}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.debug(f"ApiError {exc.status_code} in {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.errors)


async def media_storage_error_handler(request: Request, exc: MediaStorageError) -> JSONResponse:
    """Storage provider failures surface as 502 Bad Gateway."""
    logger.error(
        f"Media storage failure in {request.method} {request.url.path}: {exc}",
        extra={"provider_status": exc.status_code, "details": exc.details},
    )
    log_error("MediaStorageError", str(exc), {"path": request.url.path, "provider_status": exc.status_code})
    return error_response(502, "Media storage request failed", [str(exc)])


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(422, "Validation failed", list(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns the error envelope with an
    error ID that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return error_response(
        500,
        "Internal server error",
        error_id=error_id,
        error_type=type(exc).__name__,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This function should be called during application initialization to set up
    all custom exception handlers.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(MediaStorageError, media_storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
