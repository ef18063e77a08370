"""Custom exceptions for the application."""

from typing import Any, Dict, Optional, Sequence


class CRMException(Exception):
    """Base exception for all handled application errors."""

    default_error_code = "CRM_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(CRMException):
    """Raised when the caller cannot be authenticated."""

    default_error_code = "AUTHENTICATION_FAILED"

    def __init__(self, message: str = "Authentication required.", **kwargs):
        super().__init__(message, **kwargs)


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""

    default_error_code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token has expired. Please login again.", **kwargs):
        super().__init__(message, **kwargs)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid."""

    default_error_code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid token.", **kwargs):
        super().__init__(message, **kwargs)


class AuthorizationError(CRMException):
    """Raised when an authenticated actor may not access a resource."""

    default_error_code = "ACCESS_DENIED"

    def __init__(
        self, message: str = "You do not have permission to access this resource.", **kwargs
    ):
        super().__init__(message, **kwargs)


class PermissionDeniedError(AuthorizationError):
    """Raised when the actor holds none of the required permissions."""

    default_error_code = "INSUFFICIENT_PERMISSIONS"

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        required_permissions: Sequence[str] = (),
        **kwargs,
    ):
        self.required_permissions = list(required_permissions)
        kwargs.setdefault("details", {"required_permissions": self.required_permissions})
        super().__init__(message, **kwargs)


class RoleRequiredError(AuthorizationError):
    """Raised when the actor holds none of the required roles."""

    default_error_code = "ROLE_REQUIRED"

    def __init__(
        self,
        message: str = "You do not have the required role to perform this action.",
        required_roles: Sequence[str] = (),
        **kwargs,
    ):
        self.required_roles = list(required_roles)
        kwargs.setdefault("details", {"required_roles": self.required_roles})
        super().__init__(message, **kwargs)


class ValidationError(CRMException):
    """Raised when validation fails."""

    default_error_code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed", **kwargs):
        super().__init__(message, **kwargs)


class NotFoundError(CRMException):
    """Raised when a resource is not found."""

    default_error_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found.", **kwargs):
        super().__init__(message, **kwargs)


class ConflictError(CRMException):
    """Raised when there's a conflict (e.g., duplicate resource)."""

    default_error_code = "CONFLICT"

    def __init__(self, message: str = "Resource conflict", **kwargs):
        super().__init__(message, **kwargs)


class EmailAlreadyExistsError(ConflictError):
    """Raised when email already exists."""

    default_error_code = "EMAIL_EXISTS"

    def __init__(self, message: str = "User with this email already exists", **kwargs):
        super().__init__(message, **kwargs)
