"""Custom exceptions for the Tradelink communications service."""
from typing import Any, Dict, Optional


class TradelinkException(Exception):
    """Base exception for the communications service."""

    def __init__(
        self,
        message: str,
        error_code: str = "TRADELINK_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(TradelinkException):
    """Database-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=500,
            details=details,
        )


class ConfigurationError(TradelinkException):
    """Configuration-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            details=details,
        )


class AuthenticationError(TradelinkException):
    """The acting identity is missing or malformed."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class AuthorizationError(TradelinkException):
    """Authorization-related errors."""

    def __init__(
        self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=details,
        )


class ValidationError(TradelinkException):
    """Input validation errors."""

    def __init__(
        self, message: str, field: str = None, details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details=error_details,
        )


class NotFoundError(TradelinkException):
    """Resource not found errors."""

    def __init__(
        self,
        resource: str,
        identifier: str = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if identifier:
            message += f": {identifier}"

        error_details = details or {}
        error_details["resource"] = resource
        if identifier:
            error_details["identifier"] = identifier

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=error_details,
        )
