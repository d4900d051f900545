"""
Custom Exceptions for the Laundry Pass Booking Service

Business outcomes (a taken pass, a missing privilege) are reported through
status codes on the DTOs. The exceptions in this module are reserved for
infrastructure and boundary failures.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class AuthenticationError(BaseAppException):
    """Exception raised when the caller cannot be authenticated"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class TokenError(AuthenticationError):
    """Exception raised for expired or malformed access tokens"""

    def __init__(self, message: str = "Invalid token", expired: bool = False):
        error_code = ErrorCode.TOKEN_EXPIRED if expired else ErrorCode.TOKEN_INVALID
        super().__init__(message, error_code)


class RequestError(BaseAppException):
    """Exception raised for a well-formed request rejected by a business rule"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_REQUEST, details, 400)


class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails"""

    def __init__(self, message: str = "Database connection failed"):
        super().__init__(message, error_code=ErrorCode.CONNECTION_ERROR, status_code=503)


class DuplicateEntryError(DatabaseError):
    """Exception raised when an insert violates a uniqueness constraint"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        table: Optional[str] = None
    ):
        super().__init__(message, operation="insert", table=table,
                         error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)


class ServiceUnavailableError(BaseAppException):
    """Exception raised when a core operation could not run to completion"""

    def __init__(
        self,
        message: str = "The booking service is unavailable.",
        operation: Optional[str] = None
    ):
        details = {"operation": operation} if operation else {}
        super().__init__(message, ErrorCode.SERVICE_UNAVAILABLE, details, 503)


class ConfigurationError(BaseAppException):
    """Exception raised when configuration is invalid"""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR
    ):
        details = {
            "config_key": config_key,
            "config_value": str(config_value) if config_value is not None else None
        }
        super().__init__(message, error_code, details, 500)
