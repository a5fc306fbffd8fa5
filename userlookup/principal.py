"""Represents the authenticated user (principal) and helpers to build it."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Set, Tuple

from .models import User


@dataclass(frozen=True)
class GrantedAuthority:
    """A single permission or role name. Equal by value."""

    authority: str

    def __str__(self) -> str:
        return self.authority


@dataclass(frozen=True)
class Principal:
    """
    Object handed to the authentication layer after a successful lookup.

    Attributes:
        username: The user's login name.
        password: The stored credential (never shown in repr).
        enabled: Whether the account may log in.
        authorities: Granted authorities, in load order.
        email: The user's email address.
    """
    username: str
    password: str = field(repr=False)
    enabled: bool
    authorities: Tuple[GrantedAuthority, ...] = ()
    email: Optional[str] = None

    @property
    def authority_names(self) -> Set[str]:
        """Return the authorities as a set of plain strings."""
        return {a.authority for a in self.authorities}

    def has_authority(self, name: str) -> bool:
        return name in self.authority_names


def principal_from_user(
    user: User, authorities: Iterable[GrantedAuthority]
) -> Principal:
    """
    Copy a loaded user row into a new Principal.

    The ORM object is left untouched; later changes to it are not seen
    by the returned Principal.
    """
    return Principal(
        username=user.username,
        password=user.password,
        enabled=bool(user.enabled),
        authorities=tuple(authorities),
        email=user.email,
    )
