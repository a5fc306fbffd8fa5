"""
Display helpers for the CLI.

Passwords are never shown.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.console import Console
from rich.table import Table

from .principal import Principal

console = Console()


def print_principal(principal: Principal) -> None:
    """Display a loaded principal and its authorities."""
    table = Table(title=f"Principal: {principal.username}", show_header=False)

    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    table.add_row("Username", principal.username)
    table.add_row("Email", principal.email or "")
    table.add_row("Enabled", "yes" if principal.enabled else "no")
    table.add_row(
        "Authorities",
        ", ".join(str(a) for a in principal.authorities) or "(none)",
    )

    console.print(table)


def print_users_table(users: Iterable[Any]) -> None:
    """Display a list of users and their directly granted authorities."""
    table = Table(title="Users", expand=True)

    table.add_column("ID", justify="right")
    table.add_column("Username", overflow="fold")
    table.add_column("Email", overflow="fold")
    table.add_column("Enabled")
    table.add_column("Authorities", overflow="fold")

    for u in users:
        authorities = ", ".join(a.authority for a in u.authority_rows)
        table.add_row(
            str(u.id),
            u.username,
            u.email or "",
            "yes" if u.enabled else "no",
            authorities,
        )

    console.print(table)
