"""HTTP status code constants with semantic names."""

from enum import IntEnum


class APIStatus(IntEnum):
    """Semantic HTTP status codes for API responses."""

    # Success
    SUCCESS = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # Client errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    VALIDATION_ERROR = 422
    RATE_LIMITED = 429

    # Server errors
    INTERNAL_ERROR = 500
    SERVICE_UNAVAILABLE = 503


class AccessStatus(IntEnum):
    """Status codes produced by access decisions."""

    ALLOWED = 200
    UNAUTHENTICATED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404

