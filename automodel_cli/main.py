"""Main entry point for the automodel CLI tool."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from automodel_cli import __version__
from automodel_cli.commands import config
from automodel_cli.commands.inspect import inspect_database

# Create main app
app = typer.Typer(
    name="automodel",
    help="Inspect databases and synthesize related entity types",
    no_args_is_help=True,
    add_completion=False,
)

# Add subcommands
app.add_typer(config.app, name="config")
app.command(name="inspect")(inspect_database)


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"automodel version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log inspection details to stderr"),
) -> None:
    """Inspect databases and synthesize related entity types.

    Examples:

        # Show tables, aliases and relationships of a SQLite database
        automodel inspect sqlite:///legacy.db --pretty

        # Use a named connection from ~/.automodel.yaml
        automodel inspect @warehouse --format yaml

        # Create a config file
        automodel config init
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


if __name__ == "__main__":
    app()
