"""Custom exception classes for API errors.

Each class maps one failure kind of the reading core to a transport code.
Services raise them directly; ``main.py`` renders them as error envelopes.
"""

from typing import Any

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base API error with structured response."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Any = None,
    ):
        self.code = code
        self.error_message = message
        self.details = details

        super().__init__(
            status_code=status_code,
            detail={
                "error": {
                    "code": code,
                    "message": message,
                    "details": details,
                }
            },
        )


class NotFoundError(APIError):
    """Resource not found error (404)."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=message,
        )


class UnauthorizedError(APIError):
    """Authentication required error (401)."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message=message,
        )


class ForbiddenError(APIError):
    """Permission denied error (403)."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            code="FORBIDDEN",
            message=message,
        )


class InvalidArgumentError(APIError):
    """Unknown enum tag or missing required value (400)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="INVALID_ARGUMENT",
            message=message,
            details=details,
        )


class ConflictError(APIError):
    """Resource conflict error (409)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code="CONFLICT",
            message=message,
            details=details,
        )


class DuplicateError(APIError):
    """A reading already exists for this user and document (409)."""

    def __init__(self, message: str = "Reading already exists for this document", details: Any = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code="DUPLICATE",
            message=message,
            details=details,
        )


class StorageError(APIError):
    """Opaque persistence failure (503)."""

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="STORAGE_ERROR",
            message=message,
        )
