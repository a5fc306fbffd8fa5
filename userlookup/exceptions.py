"""
Custom exceptions for the user lookup package.

This module centralizes the exceptions raised by lookups and by the
administrative commands, so callers can handle them consistently.
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class UserLookupException(Exception):
    """Base exception for all user lookup errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or "LOOKUP_ERROR"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# LOOKUP EXCEPTIONS
# =============================================================================

class UserNotFoundError(UserLookupException):
    """Raised when no user matches the given username or email."""

    def __init__(self, identifier: Any, field: str = "username"):
        self.identifier = identifier
        self.field = field
        super().__init__(
            f"No user found with {field} '{identifier}'.",
            code="NOT_FOUND:USER",
        )


class AmbiguousUserError(UserLookupException):
    """Raised when a user query matches more than one row (data integrity issue)."""

    def __init__(self, identifier: Any, field: str = "username"):
        self.identifier = identifier
        self.field = field
        super().__init__(
            f"More than one user matches {field} '{identifier}'.",
            code="AMBIGUOUS:USER",
        )


# =============================================================================
# ADMINISTRATION EXCEPTIONS
# =============================================================================

class DuplicateUserError(UserLookupException):
    """Raised when creating a user whose username or email already exists."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            f"A user with username or email matching '{username}' already exists.",
            code="DUPLICATE:USER",
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def format_exception_for_cli(exc: Exception) -> str:
    """
    Format an exception for display in the CLI.

    Args:
        exc: The exception to format.

    Returns:
        A user-friendly error message string.
    """
    if isinstance(exc, UserLookupException):
        return f"[{exc.code}] {exc.message}"
    elif isinstance(exc, ValueError):
        return f"[ERROR] {str(exc)}"
    else:
        return f"[UNEXPECTED ERROR] {type(exc).__name__}: {str(exc)}"
