"""
User lookup package.

Adapts a relational "users / authorities" schema to an authentication
layer: load a user by username or email together with its granted
authorities, and return it as a Principal.
"""

__version__ = "1.0.0"

# Main entry points
from .config import LookupConfig
from .exceptions import AmbiguousUserError, UserLookupException, UserNotFoundError
from .principal import GrantedAuthority, Principal
from .services import UserLookupService

__all__ = [
    "LookupConfig",
    "UserLookupService",
    "Principal",
    "GrantedAuthority",
    "UserLookupException",
    "UserNotFoundError",
    "AmbiguousUserError",
]
