"""Connection handles: the capabilities the schema inspector relies on."""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import and_, column, inspect, select, table
from sqlalchemy.engine import Engine

from automodel.engine import create_database_engine
from automodel.errors import UnsupportedOperation
from automodel.models import ColumnDescriptor, ForeignKeyDescriptor
from automodel.type_mapping import map_database_type_to_column_type

logger = logging.getLogger(__name__)


def synthetic_constraint_name() -> str:
    """Return a random, unique foreign key constraint name."""
    return f"FK_{uuid.uuid4().hex}"


def split_table_name(table_name: str) -> tuple[str | None, str]:
    """Split 'ns.Table' into ('ns', 'Table'); unqualified names have no namespace."""
    namespace, _, name = table_name.rpartition(".")
    return namespace or None, name


class Connection(ABC):
    """An open database connection that can describe its own schema."""

    @abstractmethod
    def engine_identifier(self) -> str:
        """Return the database engine identifier (e.g. 'postgresql')."""

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Return the names of all tables visible to this connection."""

    @abstractmethod
    def describe_columns(self, table_name: str) -> list[ColumnDescriptor]:
        """Return the columns of a table, in declaration order."""

    @abstractmethod
    def primary_key(self, table_name: str) -> str | list[str] | None:
        """Return the primary key column, the list of columns if composite, or None."""

    def foreign_keys(self, table_name: str) -> list[ForeignKeyDescriptor]:
        """Return the declared foreign keys of a table.

        Raises:
            UnsupportedOperation: If the engine cannot report foreign keys
        """
        raise UnsupportedOperation("foreign_keys")

    @abstractmethod
    def fetch_one(self, table_name: str, columns: list[str], criteria: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first row matching every criterion as a column -> value dict, or None."""

    def close(self) -> None:
        """Release any resources held by the connection."""

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class SqlAlchemyConnection(Connection):
    """Connection backed by a SQLAlchemy engine and its reflection inspector."""

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        """
        Args:
            engine: SQLAlchemy engine to inspect and query
            schema: Database schema to list tables from (None = default schema)
        """
        self.engine = engine
        self.schema = schema or None
        self._inspector = inspect(engine)

    @classmethod
    def from_url(cls, connection_string: str, schema: str | None = None, echo: bool = False) -> "SqlAlchemyConnection":
        """Create a connection from a database URL."""
        return cls(create_database_engine(connection_string, echo=echo), schema=schema)

    def engine_identifier(self) -> str:
        return self.engine.dialect.name

    def _resolve(self, table_name: str) -> tuple[str | None, str]:
        schema, name = split_table_name(table_name)
        return schema or self.schema, name

    def list_tables(self) -> list[str]:
        return list(self._inspector.get_table_names(schema=self.schema))

    def describe_columns(self, table_name: str) -> list[ColumnDescriptor]:
        schema, name = self._resolve(table_name)
        columns = self._inspector.get_columns(name, schema=schema)

        descriptors = []
        for col in columns:
            sql_type = str(col["type"])
            descriptors.append(
                ColumnDescriptor(
                    name=col["name"],
                    type=map_database_type_to_column_type(sql_type),
                    nullable=col.get("nullable", True),
                    metadata={
                        "sql_type": sql_type,
                        "default": str(col.get("default")) if col.get("default") is not None else None,
                        "autoincrement": col.get("autoincrement"),
                    },
                )
            )
        return descriptors

    def primary_key(self, table_name: str) -> str | list[str] | None:
        schema, name = self._resolve(table_name)
        pk_columns = self._inspector.get_pk_constraint(name, schema=schema).get("constrained_columns") or []

        if not pk_columns:
            return None
        if len(pk_columns) == 1:
            return pk_columns[0]
        return list(pk_columns)

    def foreign_keys(self, table_name: str) -> list[ForeignKeyDescriptor]:
        schema, name = self._resolve(table_name)

        try:
            fks = self._inspector.get_foreign_keys(name, schema=schema)
        except NotImplementedError as e:
            raise UnsupportedOperation("foreign_keys") from e

        descriptors = []
        for fk in fks:
            constrained = fk.get("constrained_columns") or []
            referred = fk.get("referred_columns") or []
            referred_table = fk["referred_table"]

            # REFERENCES without a column list points at the referred table's primary key
            if not referred:
                referred_pk = self.primary_key(
                    f"{fk['referred_schema']}.{referred_table}" if fk.get("referred_schema") else referred_table
                )
                referred = [referred_pk] if isinstance(referred_pk, str) else list(referred_pk or [])

            if len(constrained) != 1 or len(referred) != 1:
                logger.debug(f"Skipping multi-column foreign key {fk.get('name')!r} on '{table_name}'")
                continue

            descriptors.append(
                ForeignKeyDescriptor(
                    source_table=name,
                    source_column=constrained[0],
                    target_table=referred_table,
                    target_column=referred[0],
                    name=fk.get("name") or synthetic_constraint_name(),
                )
            )
        return descriptors

    def fetch_one(self, table_name: str, columns: list[str], criteria: dict[str, Any]) -> dict[str, Any] | None:
        if not criteria:
            raise ValueError("fetch_one requires at least one criterion")

        schema, name = self._resolve(table_name)
        target = table(name, *(column(col) for col in dict.fromkeys([*columns, *criteria])), schema=schema)
        query = (
            select(*(target.c[col] for col in columns))
            .where(and_(*(target.c[key] == value for key, value in criteria.items())))
            .limit(1)
        )

        with self.engine.connect() as conn:
            row = conn.execute(query).mappings().first()

        return dict(row) if row is not None else None

    def close(self) -> None:
        self.engine.dispose()
