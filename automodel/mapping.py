"""Synthesis of related entity types from an inspected schema.

Synthesis runs in two passes. The first builds a TableDescriptor and an
EntityType for every table; the second wires belongs-to relationships from
the collected foreign keys, once every entity exists, so forward and circular
references resolve.
"""

import logging
import re

from automodel.adapters import AdapterRegistry
from automodel.connection import Connection, split_table_name
from automodel.entities import BelongsTo, EntityType
from automodel.inspector import SchemaInspector
from automodel.models import TableDescriptor
from automodel.naming import normalize_column_name, normalize_table_name, underscore

logger = logging.getLogger(__name__)


def normalize_subschema(subschema: str) -> str:
    """Return the subschema as a table-name prefix ending in exactly one '.', or ''."""
    prefix = re.sub(r"\.+$", ".", f"{subschema}.")
    return prefix.lstrip(".")


def scoped_table_names(table_names: list[str], prefix: str) -> list[str]:
    """Qualify table names with the subschema prefix.

    Names that are already qualified are kept only if they live under the prefix.
    """
    scoped = []
    for name in table_names:
        if "." in name:
            if not name.startswith(prefix):
                continue
            name = name[len(prefix) :]
        scoped.append(f"{prefix}{name}")
    return scoped


def map_tables(inspector: SchemaInspector, subschema: str = "") -> list[TableDescriptor]:
    """Build a TableDescriptor for every table visible to the inspector.

    Args:
        inspector: Schema inspector bound to an open connection
        subschema: Namespace prefix for table names (e.g. 'dbo')

    Returns:
        Table descriptors in table-list order, with columns, primary key,
        foreign keys and raw-name column aliases populated
    """
    prefix = normalize_subschema(subschema)
    tables = []
    entity_names: set[str] = set()

    for table_name in scoped_table_names(inspector.list_tables(), prefix):
        columns = inspector.columns_of(table_name)
        base_name = split_table_name(table_name)[1]

        entity_name = normalize_table_name(base_name)
        if entity_name in entity_names:
            suffix = 2
            while f"{entity_name}{suffix}" in entity_names:
                suffix += 1
            logger.warning(
                f"Entity name '{entity_name}' is already taken; table '{table_name}' becomes '{entity_name}{suffix}'"
            )
            entity_name = f"{entity_name}{suffix}"
        entity_names.add(entity_name)

        tables.append(
            TableDescriptor(
                qualified_name=table_name,
                base_name=base_name,
                entity_name=entity_name,
                columns=columns,
                primary_key=inspector.primary_key_of(table_name),
                column_aliases={col.name: col for col in columns},
                foreign_keys=inspector.foreign_keys_of(table_name),
            )
        )

    return tables


def build_entity(table: TableDescriptor, connection: Connection) -> EntityType:
    """Add normalized column aliases to a table and attach its entity type.

    Raw names always win; a normalized alias that collides with an existing
    name is dropped.
    """
    for col in table.columns:
        alias = normalize_column_name(col)
        if alias not in table.column_aliases:
            table.column_aliases[alias] = col

    table.entity = EntityType(table, connection)
    return table.entity


def wire_relationships(tables: list[TableDescriptor]) -> int:
    """Attach a belongs-to relationship for every foreign key between synthesized tables.

    Foreign keys whose source or target table was not synthesized are skipped.

    Returns:
        Number of relationships wired

    Raises:
        ValueError: If a foreign key names a column its table does not have
    """
    by_base_name: dict[str, TableDescriptor] = {}
    for table in tables:
        by_base_name.setdefault(table.base_name, table)

    wired = 0
    for fk in (fk for table in tables for fk in table.foreign_keys):
        source = by_base_name.get(split_table_name(fk.source_table)[1])
        target = by_base_name.get(split_table_name(fk.target_table)[1])
        if source is None or target is None:
            logger.debug(f"Skipping foreign key {fk.name}: '{fk.source_table}' -> '{fk.target_table}' not inspected")
            continue

        if fk.source_column not in source.column_aliases:
            raise ValueError(f"Foreign key {fk.name} references unknown column '{source.base_name}.{fk.source_column}'")
        if fk.target_column not in target.column_aliases:
            raise ValueError(f"Foreign key {fk.name} references unknown column '{target.base_name}.{fk.target_column}'")

        relationship = BelongsTo(
            field=target.base_name,
            target=target.entity,
            foreign_key=source.column_aliases[fk.source_column].name,
            primary_key=target.column_aliases[fk.target_column].name,
            constraint_name=fk.name,
        )
        if source.entity.add_relationship(relationship, underscore(target.entity_name)):
            wired += 1

    return wired


def inspect(
    connection: Connection,
    subschema: str = "",
    registry: AdapterRegistry | None = None,
) -> list[TableDescriptor]:
    """Inspect a database and synthesize one related entity type per table.

    Args:
        connection: Open connection to inspect
        subschema: Namespace prefix for table names (e.g. 'dbo')
        registry: Adapter registry to consult (default: the process-wide registry)

    Returns:
        Table descriptors, each with its entity type attached
    """
    inspector = SchemaInspector(connection, registry=registry)

    tables = map_tables(inspector, subschema=subschema)
    for table in tables:
        build_entity(table, connection)

    # Every entity exists now, so relationships can reference any of them
    wired = wire_relationships(tables)

    logger.info(f"Synthesized {len(tables)} entity types with {wired} relationships")
    return tables
