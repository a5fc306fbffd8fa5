"""Application configuration.

Purpose:
- Centralize runtime configuration (DB url, Sentry, lookup defaults).
- Hold the immutable query/prefix configuration used by the lookup service.

Notes:
- Default values are safe for local development.
- Values can be overridden with environment variables.
"""
from __future__ import annotations

import os
import re

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# DEFAULT QUERIES
# Textual SQL with named bind parameters. Returned columns must keep the
# names of the default queries so rows map back onto the ORM models.
DEF_USERS_BY_USERNAME_QUERY = (
    "SELECT id, username, email, password, enabled "
    "FROM users WHERE username = :username"
)
DEF_USERS_BY_EMAIL_QUERY = (
    "SELECT id, username, email, password, enabled "
    "FROM users WHERE email = :email"
)
DEF_AUTHORITIES_BY_USERNAME_QUERY = (
    "SELECT id, username, authority FROM authorities WHERE username = :username"
)
DEF_GROUP_AUTHORITIES_BY_USERNAME_QUERY = (
    "SELECT g.id, g.group_name, ga.authority "
    "FROM groups g, group_members gm, group_authorities ga "
    "WHERE gm.username = :username "
    "AND g.id = ga.group_id "
    "AND g.id = gm.group_id"
)


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a boolean environment variable ('1', 'true', 'yes', 'on')."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _check_bind_param(query: str, param: str) -> str:
    """Ensure a query is non-empty and references the named bind parameter."""
    if not query or not query.strip():
        raise ValueError("query must be set and non-empty")
    if not re.search(rf"(?<!:):{param}\b", query):
        raise ValueError(f"query must reference the ':{param}' bind parameter")
    return query.strip()


# LOOKUP CONFIGURATION
class LookupConfig(BaseModel):
    """
    Immutable configuration of a UserLookupService.

    Attributes:
        users_by_username_query: Loads one user, bound to ':username'.
        users_by_email_query: Loads one user, bound to ':email'.
        authorities_by_username_query: Loads authority rows, bound to ':username'.
        group_authorities_by_username_query: Loads group authority rows,
            bound to ':username'. Only used when enable_groups is true.
        role_prefix: Prepended to every authority read from the store
            (e.g. 'ROLE_').
        username_based_primary_key: True when the user queries return the
            username itself rather than an opaque primary key. Kept for
            callers that inspect it; lookups do not depend on it.
        enable_authorities: Load authorities granted directly to the user.
        enable_groups: Load authorities granted through group membership.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    users_by_username_query: str = DEF_USERS_BY_USERNAME_QUERY
    users_by_email_query: str = DEF_USERS_BY_EMAIL_QUERY
    authorities_by_username_query: str = DEF_AUTHORITIES_BY_USERNAME_QUERY
    group_authorities_by_username_query: str = DEF_GROUP_AUTHORITIES_BY_USERNAME_QUERY
    role_prefix: str = ""
    username_based_primary_key: bool = True
    enable_authorities: bool = True
    enable_groups: bool = False

    @field_validator(
        "users_by_username_query",
        "authorities_by_username_query",
        "group_authorities_by_username_query",
    )
    @classmethod
    def validate_username_query(cls, v: str) -> str:
        return _check_bind_param(v, "username")

    @field_validator("users_by_email_query")
    @classmethod
    def validate_email_query(cls, v: str) -> str:
        return _check_bind_param(v, "email")

    @model_validator(mode="after")
    def validate_authority_source(self) -> "LookupConfig":
        if not (self.enable_authorities or self.enable_groups):
            raise ValueError(
                "Use of either authorities or groups must be enabled"
            )
        return self


# APPLICATION SETTINGS
class Settings(BaseModel):
    """Typed config object for all application settings."""

    # SQLite file in project root
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./userlookup.db")

    # Optional Sentry DSN for error tracking
    SENTRY_DSN: str | None = os.getenv("SENTRY_DSN")

    # Environment name used by Sentry
    SENTRY_ENV: str = os.getenv("SENTRY_ENV", "development")

    # Sample rate for tracing
    SENTRY_TRACES: float = float(os.getenv("SENTRY_TRACES", "0.0"))

    # Lookup defaults used by the CLI
    ROLE_PREFIX: str = os.getenv("USERLOOKUP_ROLE_PREFIX", "")
    ENABLE_GROUPS: bool = _env_flag("USERLOOKUP_ENABLE_GROUPS")

    def lookup_config(self, **overrides) -> LookupConfig:
        """Build a LookupConfig from these settings, with optional overrides."""
        values = {
            "role_prefix": self.ROLE_PREFIX,
            "enable_groups": self.ENABLE_GROUPS,
        }
        values.update(overrides)
        return LookupConfig(**values)


# Shared settings instance
settings = Settings()
