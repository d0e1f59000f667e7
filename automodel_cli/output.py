"""Output formatting utilities for CLI."""

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

from automodel.models import TableDescriptor

console = Console()


def describe_table(table: TableDescriptor) -> dict[str, Any]:
    """Summarize a table descriptor and its entity type as plain data."""
    aliases: dict[str, list[str]] = {col.name: [] for col in table.columns}
    for alias, col in table.column_aliases.items():
        if alias != col.name:
            aliases[col.name].append(alias)

    # A relationship is attached under its field name and then its aliases
    fields: dict[int, list[str]] = {}
    by_id = {}
    if table.entity is not None:
        for field, relationship in table.entity.relationships.items():
            fields.setdefault(id(relationship), []).append(field)
            by_id[id(relationship)] = relationship

    relationships = [
        {
            "field": names[0],
            "aliases": names[1:],
            "target": by_id[key].target.name,
            "foreign_key": by_id[key].foreign_key,
            "primary_key": by_id[key].primary_key,
        }
        for key, names in fields.items()
    ]

    return {
        "table": table.qualified_name,
        "entity": table.entity_name,
        "primary_key": table.primary_key,
        "composite_primary_key": table.is_composite,
        "columns": [
            {
                "name": col.name,
                "type": col.type.value,
                "nullable": col.nullable,
                "aliases": aliases[col.name],
            }
            for col in table.columns
        ],
        "relationships": relationships,
    }


def format_json(data: Any, pretty: bool = False) -> str:
    """Format data as JSON.

    Args:
        data: Data to format
        pretty: Whether to pretty-print with indentation

    Returns:
        JSON string
    """
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def format_yaml(data: Any) -> str:
    """Format data as YAML."""
    result = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return str(result) if result is not None else ""


def output_document(
    data: Any,
    output_path: Path | None = None,
    output_format: str = "json",
    pretty: bool = False,
) -> None:
    """Output data to file or stdout.

    Args:
        data: JSON-compatible data
        output_path: Output file path (None = stdout)
        output_format: Output format (json or yaml)
        pretty: Whether to pretty-print JSON
    """
    match output_format:
        case "yaml":
            output_str = format_yaml(data)
        case "json":
            output_str = format_json(data, pretty=pretty)
        case _:
            typer.secho(f"✗ Error: Unknown output format: {output_format}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output_str, encoding="utf-8")
        typer.secho(f"✓ Schema written to {output_path}", fg=typer.colors.GREEN)
    else:
        # Pretty print to terminal with syntax highlighting
        syntax = Syntax(output_str, output_format, theme="monokai", line_numbers=False)
        console.print(syntax)


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message to stderr.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def success_message(message: str) -> None:
    """Print success message."""
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
