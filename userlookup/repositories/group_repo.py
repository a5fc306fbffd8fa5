"""Group repository: groups, their members and their authorities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from ..models import Group, GroupAuthority, GroupMember


def get_or_create_group(db: Session, group_name: str) -> Group:
    """Return the group with this name, creating it if missing."""
    group = db.query(Group).filter(Group.group_name == group_name).one_or_none()
    if not group:
        group = Group(group_name=group_name)
        db.add(group)
        db.flush()
    return group


def add_group_authority(db: Session, group: Group, authority: str) -> None:
    """Grant an authority to every member of a group (no duplicates)."""
    existing = (
        db.query(GroupAuthority)
        .filter(
            GroupAuthority.group_id == group.id,
            GroupAuthority.authority == authority,
        )
        .one_or_none()
    )
    if not existing:
        db.add(GroupAuthority(group_id=group.id, authority=authority))
    db.commit()


def add_group_member(db: Session, group: Group, username: str) -> None:
    """Add a user to a group (no duplicates)."""
    existing = (
        db.query(GroupMember)
        .filter(GroupMember.group_id == group.id, GroupMember.username == username)
        .one_or_none()
    )
    if not existing:
        db.add(GroupMember(group_id=group.id, username=username))
    db.commit()
