from abc import ABC
from datetime import datetime


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a resource with the same unique key already exists."""


class RateLimitedError(UserError):
    """Raised when a caller exceeded the attempt limit for an operation."""

    def __init__(self, retry_after: datetime, limiter_type: str) -> None:
        super().__init__(f"Too many attempts, retry after {retry_after.isoformat()}")
        self.retry_after = retry_after
        self.limiter_type = limiter_type


class CodeSpaceExhaustedError(Exception):
    """Raised when no free login code was found within the configured attempt budget."""


class StoreSchemaError(Exception):
    """Raised when the store file is valid JSON but its records do not match the schema."""
