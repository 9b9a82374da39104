"""
Custom exceptions for the Wayfinder API.
Every error carries a machine-readable code and the HTTP status it maps to.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Access errors
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"

    # POI store errors
    REPOSITORY_UNAVAILABLE = "REPOSITORY_UNAVAILABLE"
    REPOSITORY_FAILURE = "REPOSITORY_FAILURE"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class WayfinderException(Exception):
    """Base exception for the Wayfinder API."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(WayfinderException):
    """Raised when caller input is malformed or out of range."""

    def __init__(self, message: str, field: Optional[str] = None, reason: Optional[str] = None):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if reason:
            details["reason"] = reason
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400
        )


class UnauthorizedError(WayfinderException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            error_code=ErrorCode.UNAUTHORIZED,
            status_code=401
        )


class ForbiddenError(WayfinderException):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            status_code=403
        )


class RepositoryUnavailableError(WayfinderException):
    """
    The spatial query path of the POI store cannot serve a request.

    Missing spatial extension, broken index or a query engine failure.
    Never surfaced to callers; the nearby service falls back to a scan.
    """

    def __init__(self, message: str = "Spatial query unavailable", cause: Optional[BaseException] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.REPOSITORY_UNAVAILABLE,
            details={"cause": type(cause).__name__} if cause else None,
            status_code=503
        )
        self.cause = cause


class RepositoryFailureError(WayfinderException):
    """
    A plain read of the POI store failed.

    The message stays generic so driver error text never reaches a response.
    """

    def __init__(self, message: str = "Failed to fetch nearby POIs"):
        super().__init__(
            message=message,
            error_code=ErrorCode.REPOSITORY_FAILURE,
            status_code=500
        )
