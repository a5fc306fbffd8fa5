"""
User lookup - Command Line Interface.

This module provides the CLI using Typer, with:
- Database bootstrap commands (schema, demo data)
- User, authority and group management commands
- A lookup command showing what the authentication layer would receive
"""

from typing import List, Optional

import sentry_sdk
import typer
from rich.markup import escape

from .config import settings
from .db import get_db, init_db
from .exceptions import (
    DuplicateUserError,
    UserLookupException,
    UserNotFoundError,
    format_exception_for_cli,
)
from .repositories.group_repo import (
    add_group_authority,
    add_group_member,
    get_or_create_group,
)
from .repositories.user_repo import (
    add_authority_row,
    create_user_row,
    get_user_by_username,
    list_all_users,
    user_exists,
)
from .seeds import seed_demo
from .sentry_init import init_sentry
from .services import UserLookupService
from .ui import console, print_principal, print_users_table

# Root Typer app for the whole command line interface.
app = typer.Typer(help="User lookup - users, authorities and principals")

# Sub-apps to group commands by domain.
users_app = typer.Typer(help="Manage users and their authorities")
groups_app = typer.Typer(help="Manage groups and group authorities")

# Register sub-apps into the main Typer application.
app.add_typer(users_app, name="users")
app.add_typer(groups_app, name="groups")


# =============================================================================
# ERROR HANDLING UTILITIES
# =============================================================================

def _fail(exc: Exception) -> None:
    """
    Display a user-friendly message and stop the command with exit code 1.

    Unexpected errors are also reported to Sentry.
    """
    if not isinstance(exc, UserLookupException):
        sentry_sdk.capture_exception(exc)
    console.print(f"[red]Error:[/red] {escape(format_exception_for_cli(exc))}")
    raise typer.Exit(1)


# =============================================================================
# BOOTSTRAP COMMANDS
# =============================================================================

@app.command("init-db")
def init_db_cmd():
    """Create the database tables."""
    init_db()
    console.print("[green]✓ Tables created[/green]")


@app.command("seed-demo")
def seed_demo_cmd():
    """Create the demo users (alice with ADMIN and USER, bob without authorities)."""
    with get_db() as db:
        created = seed_demo(db)
    console.print(f"[green]✓ Demo data ready[/green] ({created} user(s) created)")


# =============================================================================
# USERS COMMANDS
# =============================================================================

@users_app.command("add")
def users_add(
    username: str,
    email: str,
    password: str = typer.Option(..., "--password", help="Stored credential (opaque)"),
    disabled: bool = typer.Option(False, "--disabled", help="Create the account disabled"),
):
    """Create a user account."""
    with get_db() as db:
        if user_exists(db, username, email):
            _fail(DuplicateUserError(username))

        create_user_row(
            db,
            username=username,
            email=email,
            password=password,
            enabled=not disabled,
        )

        sentry_sdk.capture_message(f"User created: {username}", level="info")

    console.print(f"[green]✓ Created:[/green] {username}")


@users_app.command("grant")
def users_grant(username: str, authority: str):
    """Grant an authority to a user."""
    with get_db() as db:
        if not get_user_by_username(db, username):
            _fail(UserNotFoundError(username))

        add_authority_row(db, username, authority)

    console.print(f"[green]✓ Granted[/green] {authority} to {username}")


@users_app.command("list")
def users_list():
    """List all users."""
    with get_db() as db:
        users = list_all_users(db)
        if not users:
            console.print("[yellow]No user found.[/yellow]")
            return
        print_users_table(users)


# =============================================================================
# GROUPS COMMANDS
# =============================================================================

@groups_app.command("create")
def groups_create(
    name: str,
    authority: Optional[List[str]] = typer.Option(
        None, "--authority", "-a", help="Authority granted to members (repeatable)"
    ),
):
    """Create a group (or add authorities to an existing one)."""
    with get_db() as db:
        group = get_or_create_group(db, name)
        for item in authority or []:
            add_group_authority(db, group, item)

    console.print(f"[green]✓ Group ready:[/green] {name}")


@groups_app.command("add-member")
def groups_add_member(name: str, username: str):
    """Add a user to a group."""
    with get_db() as db:
        if not get_user_by_username(db, username):
            _fail(UserNotFoundError(username))

        group = get_or_create_group(db, name)
        add_group_member(db, group, username)

    console.print(f"[green]✓ Added[/green] {username} to {name}")


# =============================================================================
# LOOKUP COMMAND
# =============================================================================

@app.command("lookup")
def lookup_cmd(
    identifier: str,
    by_email: bool = typer.Option(False, "--email", help="Look the user up by email"),
    role_prefix: Optional[str] = typer.Option(
        None, "--role-prefix", help="Prefix added to every authority (e.g. ROLE_)"
    ),
    groups: Optional[bool] = typer.Option(
        None, "--groups/--no-groups", help="Include group authorities"
    ),
):
    """Load a user the way the authentication layer does and display it."""
    overrides = {}
    if role_prefix is not None:
        overrides["role_prefix"] = role_prefix
    if groups is not None:
        overrides["enable_groups"] = groups

    try:
        config = settings.lookup_config(**overrides)
    except ValueError as exc:
        _fail(exc)

    with get_db() as db:
        service = UserLookupService(db, config)
        try:
            if by_email:
                principal = service.load_user_by_email(identifier)
            else:
                principal = service.load_user_by_username(identifier)
        except UserLookupException as exc:
            _fail(exc)

        print_principal(principal)


def main():
    """Entry point for: python -m userlookup.cli"""
    init_sentry()
    app()


if __name__ == "__main__":
    main()
