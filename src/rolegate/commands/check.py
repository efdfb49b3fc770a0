"""Command: rolegate check - Decide whether a role may perform an action."""

from pathlib import Path
from typing import Annotated

import typer

from rolegate.core.errors import RoleGraphError
from rolegate.utils import EXIT_DENIED, console, fail, load_engine


def check(
    role: str = typer.Argument(..., help="Acting role identifier"),
    action: str = typer.Argument(..., help="Action to check (e.g. create_task)"),
    bootstrap: Annotated[
        Path | None,
        typer.Option("--bootstrap", "-b", help="Bootstrap YAML with roles and grants"),
    ] = None,
) -> None:
    """Check a permission.

    Exits 0 when allowed, 1 when denied and 2 when the role graph is broken.
    """
    access = load_engine(bootstrap)

    try:
        granted_by = access.resolver.granting_role(role, action)
    except RoleGraphError as e:
        raise fail(e) from e

    if granted_by is None:
        console.print(f"[red]DENY[/red] {role} -> {action}")
        raise typer.Exit(EXIT_DENIED)

    console.print(f"[green]ALLOW[/green] {role} -> {action} (granted by {granted_by})")
