"""Main rolegate CLI application."""

import typer
from rich.console import Console

from rolegate import __version__
from rolegate.commands import chain, check, permissions, validate
from rolegate.config import get_settings
from rolegate.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="rolegate",
    help="Inspect role hierarchies and check permissions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="check")(check.check)
app.command(name="chain")(chain.chain)
app.command(name="permissions")(permissions.permissions)
app.command(name="validate")(validate.validate)


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show engine log output."
    ),
) -> None:
    """rolegate CLI - Inspect role hierarchies and check permissions."""
    if version:
        console.print(f"[bold cyan]rolegate[/bold cyan] version {__version__}")
        raise typer.Exit()

    settings = get_settings()
    configure_logging(
        settings.model_copy(update={"log_level": "DEBUG" if verbose else "WARNING"})
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
