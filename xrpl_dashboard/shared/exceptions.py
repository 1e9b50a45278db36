"""
Custom exception classes for the application.

All custom exceptions inherit from base AppException for consistent error handling.
"""

from typing import Optional


class AppException(Exception):
    """
    Base application exception.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Error message
        code: Error code
        status_code: HTTP status code
    """

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        status_code: int = 500
    ):
        """
        Initialize AppException.

        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


# Database Exceptions

class DatabaseUnavailable(AppException):
    """Primary, fallback and discovered databases all failed the probe."""

    def __init__(
        self,
        message: str = "No usable MongoDB database could be resolved",
        last_error: Optional[BaseException] = None
    ):
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message=message, code="DATABASE_UNAVAILABLE", status_code=500)
        self.last_error = last_error


class ConnectionTimeout(AppException):
    """Connection attempt or query exceeded its time budget."""

    def __init__(self, message: str = "Database operation timed out"):
        super().__init__(message=message, code="CONNECTION_TIMEOUT", status_code=500)


class QueryExecutionError(AppException):
    """Driver error raised while running a query."""

    def __init__(
        self,
        operation: str,
        collection: str,
        original: BaseException
    ):
        super().__init__(
            message=f"MongoDB query error ({collection}.{operation}): {original}",
            code="QUERY_EXECUTION_ERROR",
            status_code=500
        )
        self.operation = operation
        self.collection = collection
        self.original = original


# Request Exceptions

class UnsupportedOperation(AppException):
    """Unknown query executor verb."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Unsupported operation: {operation}",
            code="UNSUPPORTED_OPERATION",
            status_code=400
        )
        self.operation = operation


class ValidationError(AppException):
    """Missing or invalid request fields."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message=message, code="VALIDATION_ERROR", status_code=400)


class MalformedInput(AppException):
    """Request body could not be parsed."""

    def __init__(self, message: str = "Malformed request body"):
        super().__init__(message=message, code="MALFORMED_INPUT", status_code=400)


class ConflictError(AppException):
    """Resource already exists."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code="CONFLICT", status_code=409)
