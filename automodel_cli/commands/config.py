"""Configuration file commands."""

import typer

from automodel.engine import sanitize_connection_string
from automodel_cli.config import get_config_path, init_config, load_config, validate_config
from automodel_cli.output import error_message, format_yaml, success_message

app = typer.Typer(help="Manage the automodel configuration file")


@app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Create a config file with default settings."""
    try:
        path = init_config(force=force)
    except FileExistsError as e:
        error_message(str(e), hint="Use --force to overwrite it")
        raise typer.Exit(1) from e

    success_message(f"Config written to {path}")


@app.command("show")
def config_show() -> None:
    """Show the current configuration, with passwords masked."""
    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e), hint=f"Fix or re-create {get_config_path()}")
        raise typer.Exit(1) from e

    data = config.model_dump(mode="json")
    for spec in data["connections"].values():
        spec["url"] = sanitize_connection_string(spec["url"])

    typer.echo(f"# {get_config_path()}")
    typer.echo(format_yaml(data))

    errors = validate_config(config)
    if errors:
        for error in errors:
            error_message(error)
        raise typer.Exit(1)
