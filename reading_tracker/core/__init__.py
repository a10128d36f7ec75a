"""Core utilities package."""

from reading_tracker.core.exceptions import (
    APIError,
    ConflictError,
    DuplicateError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
)
from reading_tracker.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_access_token,
    verify_password,
)

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "verify_access_token",
    "hash_password",
    "verify_password",
    "APIError",
    "ConflictError",
    "DuplicateError",
    "ForbiddenError",
    "InvalidArgumentError",
    "NotFoundError",
    "StorageError",
    "UnauthorizedError",
]
