"""
Custom Exception Hierarchy
Domain errors raised by services and endpoints, plus the handlers that turn
them (and framework/database errors) into the JSON response envelope.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from internship_tracker.config import settings

logger = logging.getLogger(__name__)


class TrackerException(Exception):
    """Base exception for all domain errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationException(TrackerException):
    """Request data failed validation"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationException":
        return cls([f"{field}: {message}"])


class AuthenticationException(TrackerException):
    """Missing, expired or invalid credentials"""

    status_code = status.HTTP_401_UNAUTHORIZED


class ResourceNotFoundException(TrackerException):
    """Requested resource not found (or not owned by the caller)"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str, identifier: Optional[str] = None):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found")


class DuplicateResourceException(TrackerException):
    """Resource already exists"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, resource_type: str, field: str):
        self.resource_type = resource_type
        self.field = field
        super().__init__(f"{resource_type} with this {field} already exists")


def error_response(status_code: int, message: str, errors: Optional[List[str]] = None) -> JSONResponse:
    """Build the failure envelope."""
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _format_validation_error(error: dict) -> str:
    # Drop the "query"/"body"/"path" prefix so messages name the field itself
    location = [str(part) for part in error.get("loc", ()) if part not in ("query", "body", "path")]
    field = ".".join(location)
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def tracker_exception_handler(request: Request, exc: TrackerException) -> JSONResponse:
    errors = getattr(exc, "errors", None)
    return error_response(exc.status_code, exc.message, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_format_validation_error(error) for error in exc.errors()]
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) if settings.DEBUG else "Internal server error",
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) if settings.DEBUG else "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach envelope-producing handlers to the application."""
    app.add_exception_handler(TrackerException, tracker_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
