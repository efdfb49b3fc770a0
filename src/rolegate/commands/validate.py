"""Command: rolegate validate - Check the whole role graph for faults."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from rolegate.utils import EXIT_FAULT, console, load_engine


def validate(
    bootstrap: Annotated[
        Path | None,
        typer.Option("--bootstrap", "-b", help="Bootstrap YAML with roles and grants"),
    ] = None,
) -> None:
    """Walk every role's ancestor chain and report cycles, dangling
    parents and chains that exceed the depth limit.
    """
    access = load_engine(bootstrap)
    faults = access.validate()

    if not faults:
        console.print(
            f"[green]OK[/green] {len(access.graph)} roles, "
            f"{len(access.index)} grants, no faults."
        )
        return

    table = Table(title="Role graph faults", show_header=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Fault", style="red", no_wrap=True)
    table.add_column("Detail")

    for role_id, fault in faults.items():
        table.add_row(role_id, fault.error_code, fault.message)

    console.print()
    console.print(table)
    console.print()
    raise typer.Exit(EXIT_FAULT)
