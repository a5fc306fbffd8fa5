"""User lookup service.

Retrieves the user details (username, password, enabled flag and
authorities) from a relational store using configurable queries.

Default schema
--------------
Two tables are assumed, "users" and "authorities":

    users(id, username, email, password, enabled)
    authorities(id, username, authority)

If you are using an existing schema, override the queries in
LookupConfig so that the returned columns keep the default names.

Group support
-------------
With ``enable_groups`` set, authorities are also loaded through group
membership ("groups", "group_members", "group_authorities"). Group
authorities are appended after the ones granted directly to the user.
Set ``enable_authorities`` to False to rely on groups only.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import sentry_sdk
from sqlalchemy.exc import MultipleResultsFound, NoResultFound
from sqlalchemy.orm import Session

from ..config import LookupConfig
from ..exceptions import AmbiguousUserError, UserNotFoundError
from ..models import User
from ..principal import GrantedAuthority, Principal, principal_from_user
from ..repositories.user_repo import (
    fetch_authority_names,
    fetch_group_authority_names,
    fetch_single_user,
)

logger = logging.getLogger(__name__)

# (username, authorities loaded from the store) -> final authorities
CustomAuthorities = Callable[[str, List[GrantedAuthority]], List[GrantedAuthority]]


def _no_custom_authorities(
    username: str, authorities: List[GrantedAuthority]
) -> List[GrantedAuthority]:
    return authorities


class UserLookupService:
    """
    Load a Principal by username or email.

    Args:
        db: The active database session.
        config: Queries, role prefix and authority sources. Defaults to
            LookupConfig().
        custom_authorities: Optional hook receiving the username and the
            authorities loaded from the store, returning the authorities
            to attach. Use it to add authorities not stored in the database.
    """

    def __init__(
        self,
        db: Session,
        config: Optional[LookupConfig] = None,
        custom_authorities: Optional[CustomAuthorities] = None,
    ):
        self.db = db
        self.config = config or LookupConfig()
        self.custom_authorities = custom_authorities or _no_custom_authorities

    @property
    def username_based_primary_key(self) -> bool:
        return self.config.username_based_primary_key

    def load_user_by_username(self, username: str) -> Principal:
        """
        Load a user and its authorities from its username.

        Runs the user query, then the authority queries, once each. A None
        username fails without querying.

        Raises:
            UserNotFoundError: If no user has this username.
            AmbiguousUserError: If several users match the query.
        """
        user = self._load_single_user(
            self.config.users_by_username_query, "username", username
        )
        return self._fill_authorities(user)

    def load_user_by_email(self, email: str) -> Principal:
        """
        Load a user and its authorities from its email.

        Raises:
            UserNotFoundError: If no user has this email.
            AmbiguousUserError: If several users match the query.
        """
        user = self._load_single_user(
            self.config.users_by_email_query, "email", email
        )
        return self._fill_authorities(user)

    def _load_single_user(self, query: str, field: str, value: str) -> User:
        if value is None:
            raise UserNotFoundError(value, field=field)

        try:
            return fetch_single_user(self.db, query, **{field: value})
        except NoResultFound as exc:
            # Do not reveal more than "not found" to the caller
            sentry_sdk.capture_message(
                f"User lookup failed for {field}: {value}",
                level="warning",
            )
            raise UserNotFoundError(value, field=field) from exc
        except MultipleResultsFound as exc:
            sentry_sdk.capture_message(
                f"Several users match {field}: {value}",
                level="error",
            )
            raise AmbiguousUserError(value, field=field) from exc

    def _fill_authorities(self, user: User) -> Principal:
        """Load the authorities of a user and return a new Principal."""
        prefix = self.config.role_prefix
        authorities: List[GrantedAuthority] = []

        if self.config.enable_authorities:
            names = fetch_authority_names(
                self.db, self.config.authorities_by_username_query, user.username
            )
            authorities.extend(GrantedAuthority(prefix + name) for name in names)

        if self.config.enable_groups:
            names = fetch_group_authority_names(
                self.db,
                self.config.group_authorities_by_username_query,
                user.username,
            )
            authorities.extend(GrantedAuthority(prefix + name) for name in names)

        authorities = self.custom_authorities(user.username, authorities)

        logger.debug(
            "Loaded user %s with %d authorities", user.username, len(authorities)
        )
        return principal_from_user(user, authorities)
