"""User repository.

This module contains all database operations related to users and their
authorities. The configurable user lookup runs textual SQL mapped back
onto the User model; authority lookups read the "authority" column of
the rows their query returns. Administrative writes use the ORM directly.
"""

from __future__ import annotations
from typing import Iterable, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session, selectinload

from ..models import Authority, User


# Configurable lookups
def fetch_single_user(db: Session, query: str, **params) -> User:
    """
    Run a user query expected to match exactly one row.

    Columns returned by the query overwrite any copy of the user already
    held by the session.

    Raises:
        sqlalchemy.exc.NoResultFound: If no row matches.
        sqlalchemy.exc.MultipleResultsFound: If several rows match.
    """
    return (
        db.query(User)
        .from_statement(text(query))
        .params(**params)
        .populate_existing()
        .one()
    )


def fetch_authority_names(db: Session, query: str, username: str) -> List[str]:
    """Return the authority column of every row the query returns, in store order."""
    rows = db.execute(text(query), {"username": username}).mappings().all()
    return [row["authority"] for row in rows]


def fetch_group_authority_names(db: Session, query: str, username: str) -> List[str]:
    """Return the authority column of every group authority row of a user."""
    rows = db.execute(text(query), {"username": username}).mappings().all()
    return [row["authority"] for row in rows]


# Basic lookups
def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Return a user object matching the username, or None if not found."""
    return db.query(User).filter(User.username == username).one_or_none()


def user_exists(db: Session, username: str, email: str) -> bool:
    """Return True if a user already uses this username or email."""
    return (
        db.query(User)
        .filter((User.username == username) | (User.email == email))
        .first()
        is not None
    )


# Write operations
def create_user_row(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    enabled: bool = True,
) -> User:
    """
    Create a new user row in the database.

    Args:
        db: The active database session.
        username: Unique login name.
        email: Unique email address.
        password: Stored credential, already in its final (opaque) form.
        enabled: Whether the account is active.

    Returns:
        The newly created User object.
    """
    user = User(
        username=username,
        email=email,
        password=password,
        enabled=enabled,
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_authority_row(db: Session, username: str, authority: str) -> Authority:
    """Grant an authority to a user, reusing the row if it already exists."""
    existing = (
        db.query(Authority)
        .filter(Authority.username == username, Authority.authority == authority)
        .one_or_none()
    )
    if existing:
        return existing

    row = Authority(username=username, authority=authority)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_all_users(db: Session) -> Iterable[User]:
    """Return all users sorted by username for predictable ordering."""
    return (
        db.query(User)
        .options(selectinload(User.authority_rows))
        .order_by(User.username.asc())
        .all()
    )
