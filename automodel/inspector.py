"""Schema inspection through registered adapters or a connection's native capabilities."""

import logging
import re
from collections.abc import Callable
from typing import Any

from automodel.adapters import AdapterRegistry, adapters
from automodel.connection import Connection, split_table_name, synthetic_constraint_name
from automodel.errors import UnregisteredAdapter, UnsupportedOperation
from automodel.models import ColumnDescriptor, ForeignKeyDescriptor
from automodel.naming import pluralize

logger = logging.getLogger(__name__)

ID_SUFFIX = re.compile(r"(?:_id|Id)$")
ID_COLUMN_NAMES = ("id", "Id", "ID")


def qualified_name(table_name: str, context: str) -> str:
    """Prefix table_name with the namespace of context.

    qualified_name("users", context="dbo.orders") -> "dbo.users"
    Already-qualified names, and contexts without a namespace, pass through unchanged.
    """
    if "." in table_name or "." not in context:
        return table_name
    return context[: context.rfind(".") + 1] + table_name


class SchemaInspector:
    """Memoized table, column, primary key and foreign key queries for one connection.

    Each query runs at most once per table for the lifetime of the inspector.
    Not thread-safe; an inspector belongs to a single inspection run.
    """

    def __init__(
        self,
        connection: Connection,
        registry: AdapterRegistry | None = None,
        engine_id: str | None = None,
    ) -> None:
        """
        Args:
            connection: Open connection to inspect
            registry: Adapter registry to consult (default: the process-wide registry)
            engine_id: Engine identifier (default: reported by the connection)
        """
        self.connection = connection
        self.engine_id = engine_id or connection.engine_identifier()
        self.adapter = (registry if registry is not None else adapters).lookup(self.engine_id)

        self._tables: list[str] | None = None
        self._columns: dict[str, list[ColumnDescriptor]] = {}
        self._primary_keys: dict[str, str | list[str] | None] = {}
        self._foreign_keys: dict[str, list[ForeignKeyDescriptor]] = {}

    def _call(self, operation: str, native: Callable[..., Any], *args: str) -> Any:
        probe = getattr(self.adapter, operation)
        if probe is not None:
            return probe(self.connection, *args)
        if not self.adapter.native_fallback:
            raise UnregisteredAdapter(self.engine_id, operation)
        return native(*args)

    def list_tables(self) -> list[str]:
        """Return the names of all tables."""
        if self._tables is None:
            self._tables = list(self._call("tables", self.connection.list_tables))
            logger.debug(f"Found {len(self._tables)} tables on '{self.engine_id}' connection")
        return self._tables

    def columns_of(self, table_name: str) -> list[ColumnDescriptor]:
        """Return the columns of a table."""
        if table_name not in self._columns:
            self._columns[table_name] = list(self._call("columns", self.connection.describe_columns, table_name))
        return self._columns[table_name]

    def primary_key_of(self, table_name: str) -> str | list[str] | None:
        """Return the primary key column of a table, a list of columns if composite, or None."""
        if table_name not in self._primary_keys:
            self._primary_keys[table_name] = self._call("primary_key", self.connection.primary_key, table_name)
        return self._primary_keys[table_name]

    def foreign_keys_of(self, table_name: str) -> list[ForeignKeyDescriptor]:
        """Return the foreign keys of a table.

        Uses the adapter probe if registered, otherwise the connection's native
        capability. Connections that cannot report foreign keys fall back to
        inferring them from column names.
        """
        if table_name not in self._foreign_keys:
            self._foreign_keys[table_name] = self._load_foreign_keys(table_name)
        return self._foreign_keys[table_name]

    def _load_foreign_keys(self, table_name: str) -> list[ForeignKeyDescriptor]:
        if self.adapter.foreign_keys is not None:
            return list(self.adapter.foreign_keys(self.connection, table_name))
        if not self.adapter.native_fallback:
            raise UnregisteredAdapter(self.engine_id, "foreign_keys")

        try:
            return list(self.connection.foreign_keys(table_name))
        except UnsupportedOperation:
            logger.debug(f"Foreign key introspection not supported for '{self.engine_id}'; inferring for '{table_name}'")
            return self.infer_foreign_keys(table_name)

    def _find_listed_table(self, candidates: tuple[str, ...], context: str) -> str | None:
        """Return the first candidate listed under the namespace of context, qualified like context.

        Bare listed names count as being under that namespace only when the
        context table is itself listed bare (its prefix came from a subschema).
        """
        listed = set(self.list_tables())
        namespace, source_table = split_table_name(context)
        bare_names_in_scope = namespace is None or source_table in listed

        for name in dict.fromkeys(candidates):
            target = qualified_name(name, context=context)
            if target in listed or (bare_names_in_scope and name in listed):
                return target
        return None

    def infer_foreign_keys(self, table_name: str) -> list[ForeignKeyDescriptor]:
        """Best-effort foreign key discovery from column naming conventions.

        A column named '<stem>_id' or '<stem>Id' references table '<stem>' (or its
        plural) under the same namespace prefix, provided that table's primary key
        is called 'id'/'Id'/'ID' or has the same name as the column. Columns that
        don't qualify are ignored.
        """
        source_table = split_table_name(table_name)[1]

        inferred = []
        for col in self.columns_of(table_name):
            stem = ID_SUFFIX.sub("", col.name)
            if stem == col.name or not stem:
                continue

            target = self._find_listed_table((stem, pluralize(stem)), context=table_name)
            if target is None:
                logger.debug(f"No table matches '{table_name}.{col.name}'")
                continue

            target_table = split_table_name(target)[1]
            target_column = self.primary_key_of(target)
            if target_column not in (*ID_COLUMN_NAMES, col.name):
                logger.debug(f"Primary key {target_column!r} of '{target_table}' does not match '{col.name}'")
                continue

            # A primary key never references itself
            if target_table == source_table and target_column == col.name:
                continue

            inferred.append(
                ForeignKeyDescriptor(
                    source_table=source_table,
                    source_column=col.name,
                    target_table=target_table,
                    target_column=target_column,
                    name=synthetic_constraint_name(),
                    inferred=True,
                )
            )

        logger.debug(f"Inferred {len(inferred)} foreign keys for '{table_name}'")
        return inferred
