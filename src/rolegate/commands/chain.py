"""Command: rolegate chain - Show a role's ancestor chain."""

from pathlib import Path
from typing import Annotated

import typer

from rolegate.core.errors import RoleGraphError
from rolegate.utils import console, fail, load_engine


def chain(
    role: str = typer.Argument(..., help="Role identifier"),
    bootstrap: Annotated[
        Path | None,
        typer.Option("--bootstrap", "-b", help="Bootstrap YAML with roles and grants"),
    ] = None,
) -> None:
    """Print the chain from ROLE up to its root."""
    access = load_engine(bootstrap)

    try:
        ancestors = list(access.graph.ancestor_chain(role))
    except RoleGraphError as e:
        raise fail(e) from e

    console.print(" -> ".join(f"[cyan]{a}[/cyan]" for a in ancestors))
