"""
Demo data seeding utilities.

Creates a small, predictable data set that exercises the lookups:
a user with authorities and a user without any.
"""

from sqlalchemy.orm import Session

from .repositories.user_repo import (
    add_authority_row,
    create_user_row,
    get_user_by_username,
)


# =============================================================================
# DEMO USERS
# =============================================================================
# (username, email, password, authorities)

DEMO_USERS = [
    ("alice", "alice@example.com", "{noop}alice", ["ADMIN", "USER"]),
    ("bob", "bob@example.com", "{noop}bob", []),
]


def seed_demo(db: Session) -> int:
    """
    Populate the database with the demo users and their authorities.

    Existing users are reused and never duplicated.

    Returns:
        The number of users created.
    """
    created = 0
    for username, email, password, authorities in DEMO_USERS:
        if not get_user_by_username(db, username):
            create_user_row(db, username=username, email=email, password=password)
            created += 1

        for authority in authorities:
            add_authority_row(db, username, authority)

    return created
