"""
Global exception handlers for the embed token service.

Every error leaves the service in the same ``{"message": ...}`` shape the
SDK uses for failed workflows; debug mode adds code and request id.
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from authkit.api.middleware.request_context import current_request, current_request_id
from authkit.core.constants import get_settings
from authkit.core.exceptions import AuthKitError
from authkit.models.error_models import ErrorCode, ErrorDetail, ErrorResponse, get_status_code
from authkit.utils.logger import logger


def _create_error_response(
    code: ErrorCode,
    message: str,
    request: Request | None = None,
    details: list[ErrorDetail] | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        code=code,
        message=message,
        request_id=current_request_id(),
        path=request.url.path if request else None,
        details=details,
    )


def _log_error(error: Exception, code: ErrorCode, status_code: int) -> None:
    """Log error with appropriate level and context."""
    ctx = current_request()
    log_context = ctx.log_fields() if ctx else {}
    log_context["error_code"] = code.value
    log_context["status_code"] = status_code

    if status_code >= 500:
        logger.error(f"Server error: {code.value} - {error}", exc_info=True, **log_context)
    elif status_code >= 400:
        logger.warning(f"Client error: {code.value} - {error}", **log_context)


async def authkit_exception_handler(request: Request, exc: AuthKitError) -> JSONResponse:
    status_code = get_status_code(exc.code)
    error_response = _create_error_response(code=exc.code, message=exc.message, request=request)
    _log_error(exc, exc.code, status_code)
    return JSONResponse(status_code=status_code, content=error_response.to_dict(include_debug=get_settings().debug))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with consistent formatting."""
    code = ErrorCode.VALIDATION_ERROR if exc.status_code < 500 else ErrorCode.INTERNAL_ERROR
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    error_response = _create_error_response(code=code, message=message, request=request)
    _log_error(exc, code, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.to_dict(include_debug=get_settings().debug),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors."""
    details = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            code=error["type"],
        )
        for error in exc.errors()
    ]
    error_response = _create_error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message="Request validation failed",
        request=request,
        details=details,
    )
    _log_error(exc, ErrorCode.VALIDATION_ERROR, 422)
    return JSONResponse(status_code=422, content=error_response.to_dict(include_debug=get_settings().debug))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; the message never leaks internals."""
    error_response = _create_error_response(
        code=ErrorCode.INTERNAL_UNEXPECTED,
        message="An unexpected error occurred",
        request=request,
    )
    _log_error(exc, ErrorCode.INTERNAL_UNEXPECTED, 500)
    return JSONResponse(status_code=500, content=error_response.to_dict(include_debug=get_settings().debug))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthKitError, authkit_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "authkit_exception_handler",
    "http_exception_handler",
    "register_exception_handlers",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
