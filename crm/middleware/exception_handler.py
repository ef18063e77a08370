"""Global exception handler middleware."""

import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from crm.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    CRMException,
    NotFoundError,
    PermissionDeniedError,
    RoleRequiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first; subclasses inherit their parent's status
STATUS_MAPPING: list[tuple[type[CRMException], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(exc: CRMException) -> int:
    for exc_type, status_code in STATUS_MAPPING:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ExceptionHandlers:
    """Centralized exception handlers for the application."""

    @staticmethod
    async def crm_exception_handler(request: Request, exc: CRMException) -> JSONResponse:
        """Handle all custom application exceptions."""

        status_code = status_for(exc)

        logger.warning(
            f"Handled exception in {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
                "status_code": status_code,
            },
        )

        content: dict[str, Any] = {
            "success": False,
            "message": exc.message,
            "error_code": exc.error_code,
            "details": exc.details,
        }

        # Clients read these at the top level
        if isinstance(exc, PermissionDeniedError):
            content["required_permissions"] = exc.required_permissions
        elif isinstance(exc, RoleRequiredError):
            content["required_roles"] = exc.required_roles

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(status_code=status_code, content=content, headers=headers)

    @staticmethod
    async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle validation exceptions from pydantic."""

        logger.warning(
            f"Validation error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "success": False,
                "message": "Validation failed",
                "error_code": "VALIDATION_ERROR",
                "details": {"validation_errors": str(exc)},
            },
        )

    @staticmethod
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle database integrity errors."""

        logger.error(
            f"Database integrity error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        # Parse common integrity violations
        error_message = "Database constraint violation"
        error_code = "INTEGRITY_ERROR"

        lowered = str(exc).lower()
        if "duplicate key" in lowered or "unique constraint" in lowered:
            error_message = "Resource already exists"
            error_code = "DUPLICATE_RESOURCE"
        elif "foreign key" in lowered:
            error_message = "Referenced resource not found"
            error_code = "FOREIGN_KEY_VIOLATION"
        elif "not null" in lowered:
            error_message = "Required field is missing"
            error_code = "REQUIRED_FIELD_MISSING"

        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "success": False,
                "message": error_message,
                "error_code": error_code,
                "details": {},
            },
        )

    @staticmethod
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle FastAPI HTTP exceptions with consistent format."""

        logger.warning(
            f"HTTP exception in {request.method} {request.url.path}: {exc.detail}",
            extra={
                "status_code": exc.status_code,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        # Map status codes to error codes
        error_code_mapping = {
            400: "BAD_REQUEST",
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            409: "CONFLICT",
            422: "VALIDATION_ERROR",
            429: "RATE_LIMITED",
            500: "INTERNAL_ERROR",
        }

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": exc.detail,
                "error_code": error_code_mapping.get(exc.status_code, "HTTP_ERROR"),
                "details": {},
            },
            headers=getattr(exc, "headers", None),
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""

        logger.error(
            f"Unexpected error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "details": {},
            },
        )


def register_exception_handlers(app: Any) -> None:
    """Register all exception handlers with the FastAPI app."""

    handlers = ExceptionHandlers()

    # Application exceptions
    app.add_exception_handler(CRMException, handlers.crm_exception_handler)

    # Database errors
    app.add_exception_handler(IntegrityError, handlers.integrity_error_handler)

    # HTTP exceptions, including Starlette's own 404/405
    app.add_exception_handler(StarletteHTTPException, handlers.http_exception_handler)

    # Pydantic validation errors raised outside request parsing
    from pydantic import ValidationError as PydanticValidationError

    app.add_exception_handler(PydanticValidationError, handlers.validation_exception_handler)

    # Catch-all for unexpected errors
    app.add_exception_handler(Exception, handlers.general_exception_handler)
