"""
Global exception handling for the application.
Every error response carries a stable ``error`` object; validation failures
also carry an ``errors`` list with one entry per offending field.
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from teamtasker.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppError):
    """Malformed or out-of-range input, reported field by field."""
    def __init__(self, errors: List[Dict[str, Any]], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class BusinessRuleViolationException(AppError):
    """Business logic violation error."""
    def __init__(self, message: str = "Business rule violation", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class ConflictException(AppError):
    """Uniqueness violation."""
    def __init__(
        self,
        message: str = "Conflict",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_409_CONFLICT,
    ):
        super().__init__(message, status_code, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


def _error_body(request: Request, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"code": code, "message": message, "details": details or {}, "path": request.url.path}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application exceptions raised by services and dependencies."""
    content: Dict[str, Any] = {
        "error": _error_body(request, exc.__class__.__name__, exc.message, exc.details),
    }
    if isinstance(exc, ValidationException):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


def _format_validation_errors(errors) -> List[Dict[str, Any]]:
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) if len(loc) > 1 else location
        formatted.append({"field": field, "message": err.get("msg", "Invalid value"), "location": location})
    return formatted


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI's 422 request validation into the 400 field-list envelope."""
    errors = _format_validation_errors(exc.errors())
    return await app_error_handler(request, ValidationException(errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-level HTTP errors (unknown route, method not allowed)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": _error_body(request, "HTTPException", str(exc.detail))},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unhandled error", path=request.url.path, method=request.method)

    message = "An unexpected error occurred. Please try again later."
    if not settings.is_production:
        message = f"{message} ({exc})"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": _error_body(request, "InternalServerError", message)},
    )


def setup_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
