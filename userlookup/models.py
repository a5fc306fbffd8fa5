"""SQLAlchemy ORM models.

Design goals:
- Mirror the classic "users / authorities" schema so existing databases
  can be used as-is.
- Group-based authorities live in their own tables ("groups",
  "group_members", "group_authorities").
"""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

# Base class used by all ORM models.
Base = declarative_base()


class User(Base):
    """User account stored in the database."""

    __tablename__ = "users"

    # Primary key.
    id = Column(Integer, primary_key=True)

    # Identity fields, both usable as lookup keys.
    username = Column(String(150), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)

    # Stored credential. Opaque to this package (hashing happens elsewhere).
    password = Column(String(255), nullable=False)

    enabled = Column(Boolean, nullable=False, default=True)

    # Authorities granted directly to this user. Loaded on access only, so
    # lookups run nothing but their configured queries.
    authority_rows = relationship(
        "Authority",
        back_populates="user",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Authority(Base):
    """A single authority (role name) granted to a user."""

    __tablename__ = "authorities"

    # Primary key.
    id = Column(Integer, primary_key=True)

    # Keyed on username rather than user id, as in the classic schema.
    username = Column(
        String(150),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    authority = Column(String(64), nullable=False)

    user = relationship("User", back_populates="authority_rows")

    # One row per (username, authority) pair.
    __table_args__ = (UniqueConstraint("username", "authority"),)


# Group-based authorities.
class Group(Base):
    """Named group of users sharing the same authorities."""

    __tablename__ = "groups"

    # Primary key.
    id = Column(Integer, primary_key=True)

    group_name = Column(String(64), nullable=False, unique=True)

    members = relationship(
        "GroupMember",
        back_populates="group",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    authorities = relationship(
        "GroupAuthority",
        back_populates="group",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class GroupMember(Base):
    """Membership of a user in a group."""

    __tablename__ = "group_members"

    # Primary key.
    id = Column(Integer, primary_key=True)

    username = Column(
        String(150),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    group_id = Column(
        Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False
    )

    group = relationship("Group", back_populates="members")

    __table_args__ = (UniqueConstraint("username", "group_id"),)


class GroupAuthority(Base):
    """Authority granted to every member of a group."""

    __tablename__ = "group_authorities"

    # Composite primary key: one row per (group, authority) pair.
    group_id = Column(
        Integer, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True
    )
    authority = Column(String(64), primary_key=True)

    group = relationship("Group", back_populates="authorities")
