"""
Business logic services for the user lookup package.

This package contains the service that turns stored users and
authorities into Principal objects.
"""

from .lookup_service import (
    CustomAuthorities,
    UserLookupService,
)

__all__ = [
    "CustomAuthorities",
    "UserLookupService",
]
