"""
Custom exception hierarchy for the Sherlock backend.

Used by pipeline services, agent tools and use cases. All exceptions inherit
from SherlockError and can carry a user-facing message. Pipeline components
convert them into typed result values at their boundaries.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class SherlockError(Exception):
    """Base exception for all Sherlock errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class ValidationError(SherlockError):
    """Raised when input validation fails."""
    pass


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------


class DatabaseError(SherlockError):
    """Base exception for database errors."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        retryable: bool = True,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.retryable = retryable


class DatabaseTimeoutError(DatabaseError):
    """Raised when a database operation times out."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Database operation timed out. Please try again.",
            retryable=True,
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Media
# -----------------------------------------------------------------------------


class MediaStorageError(SherlockError):
    """Raised when a headshot cannot be stored."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Could not store the headshot image.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at API/tool boundaries so internal details are never exposed.
    """
    if isinstance(exc, SherlockError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."
