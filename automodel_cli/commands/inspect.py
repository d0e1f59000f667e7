"""Schema inspection command."""

from pathlib import Path

import typer
from sqlalchemy.exc import SQLAlchemyError

from automodel import AutomodelError, connect, inspect
from automodel_cli.config import get_output_defaults, resolve_connection
from automodel_cli.output import describe_table, error_message, output_document


def inspect_database(
    connection: str = typer.Argument(..., help="Database URL, or @name of a configured connection"),
    subschema: str | None = typer.Option(None, "--subschema", "-s", help="Table-name namespace prefix (e.g. dbo)"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file path (default: stdout)", dir_okay=False, resolve_path=True
    ),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format: json or yaml"),
    pretty: bool | None = typer.Option(None, "--pretty", help="Pretty-print JSON output"),
) -> None:
    """Inspect a database and show the entity types and relationships automodel synthesizes.

    Examples:
        automodel inspect sqlite:///legacy.db --pretty
        automodel inspect @warehouse --subschema dbo --format yaml
    """
    try:
        spec = resolve_connection(connection)
        if subschema is not None:
            spec = spec.model_copy(update={"subschema": subschema})

        output_defaults = get_output_defaults()
        if output_format is None:
            output_format = output_defaults.format
        if pretty is None:
            pretty = output_defaults.pretty

        with connect(spec) as conn:
            tables = inspect(conn, subschema=spec.subschema)
            data = [describe_table(table) for table in tables]

    except KeyError as e:
        error_message(e.args[0], hint="Run 'automodel config show' to list configured connections")
        raise typer.Exit(1) from e
    except AutomodelError as e:
        error_message(str(e))
        raise typer.Exit(1) from e
    except SQLAlchemyError as e:
        error_message(f"Database error: {e}", hint="Check the connection string and database permissions")
        raise typer.Exit(1) from e
    except ValueError as e:
        error_message(str(e), hint="Check the config file and parameters")
        raise typer.Exit(1) from e

    output_document(data, output_path=output, output_format=output_format, pretty=pretty)
