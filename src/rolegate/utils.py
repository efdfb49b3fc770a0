"""Shared helpers for CLI commands."""

from pathlib import Path

import typer
from rich.console import Console

from rolegate.config import get_settings
from rolegate.core.errors import AppException
from rolegate.core.rbac import AccessControl


console = Console()

# Exit codes: a denial is an ordinary answer, a broken graph is not.
EXIT_DENIED = 1
EXIT_FAULT = 2


def load_engine(bootstrap: Path | None) -> AccessControl:
    """Load the RBAC engine from a bootstrap file.

    Falls back to the configured bootstrap path when none is given.

    Raises:
        typer.Exit: If no file is available or it cannot be loaded
    """
    settings = get_settings()
    path = bootstrap or settings.bootstrap_path

    if path is None:
        console.print(
            "[red]Error:[/red] No bootstrap file. "
            "Pass --bootstrap or set ROLEGATE_BOOTSTRAP_PATH."
        )
        raise typer.Exit(EXIT_FAULT)

    try:
        return AccessControl.from_file(path, max_depth=settings.max_hierarchy_depth)
    except (FileNotFoundError, ValueError, AppException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_FAULT) from e


def fail(exc: AppException) -> typer.Exit:
    """Report an engine error and build the matching exit."""
    console.print(f"[red]Error ({exc.error_code}):[/red] {exc.message}")
    return typer.Exit(EXIT_FAULT)
