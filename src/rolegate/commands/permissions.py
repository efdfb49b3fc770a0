"""Command: rolegate permissions - List a role's effective permissions."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from rolegate.core.errors import RoleGraphError
from rolegate.utils import console, fail, load_engine


def permissions(
    role: str = typer.Argument(..., help="Role identifier"),
    bootstrap: Annotated[
        Path | None,
        typer.Option("--bootstrap", "-b", help="Bootstrap YAML with roles and grants"),
    ] = None,
) -> None:
    """List every action ROLE holds, directly or through an ancestor."""
    access = load_engine(bootstrap)

    try:
        ancestors = list(access.graph.ancestor_chain(role))
    except RoleGraphError as e:
        raise fail(e) from e

    # Nearest ancestor wins when several grant the same action
    sources: dict[str, str] = {}
    for ancestor in ancestors:
        for action in sorted(access.index.actions_for(ancestor)):
            sources.setdefault(action, ancestor)

    if not sources:
        console.print(f"[yellow]Role '{role}' has no permissions.[/yellow]")
        return

    table = Table(title=f"Permissions for {role}", show_header=True)
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Granted by", style="green", no_wrap=True)

    for action in sorted(sources):
        source = sources[action]
        table.add_row(action, "(direct)" if source == role else source)

    console.print()
    console.print(table)
    console.print()
