"""Pydantic models describing inspected database structure"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field, field_validator

# ============================================================================
# Column / Foreign Key Models
# ============================================================================


class ColumnType(str, Enum):
    """Declared type tag of a column"""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    DATE = "date"
    DATETIME = "datetime"
    OTHER = "other"


class ColumnDescriptor(BaseModel):
    """A single column of an inspected table"""

    name: str = Field(description="Raw column name as reported by the database")
    type: ColumnType = Field(default=ColumnType.OTHER, description="Declared type tag")
    nullable: bool = Field(default=True, description="Whether the column accepts NULL")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Adapter-specific metadata")

    model_config = {"frozen": True}


class ForeignKeyDescriptor(BaseModel):
    """A single-column foreign key, declared by the database or inferred from naming"""

    source_table: str = Field(description="Unqualified name of the referencing table")
    source_column: str = Field(description="Referencing column")
    target_table: str = Field(description="Unqualified name of the referenced table")
    target_column: str = Field(description="Referenced column")
    name: str = Field(description="Native or synthetic constraint name")
    inferred: bool = Field(default=False, description="Whether the key was inferred heuristically")

    model_config = {"frozen": True}


# ============================================================================
# Adapter Models
# ============================================================================


class AdapterDescriptor(BaseModel):
    """Probe functions overriding how one database engine's metadata is retrieved.

    Every probe is optional. A missing probe means the connection's native
    capability is used, unless ``native_fallback`` is disabled.
    """

    engine_id: str = Field(default="", description="Database engine identifier")
    tables: Callable[..., list[str]] | None = Field(default=None, description="(connection) -> table names")
    columns: Callable[..., list[ColumnDescriptor]] | None = Field(
        default=None, description="(connection, table) -> columns"
    )
    primary_key: Callable[..., str | list[str] | None] | None = Field(
        default=None, description="(connection, table) -> primary key column(s)"
    )
    foreign_keys: Callable[..., list[ForeignKeyDescriptor]] | None = Field(
        default=None, description="(connection, table) -> foreign keys"
    )
    native_fallback: bool = Field(default=True, description="Use native capabilities for missing probes")

    model_config = {"frozen": True}

    @field_validator("engine_id")
    @classmethod
    def normalize_engine_id(cls, value: str) -> str:
        return value.strip().lower()


# ============================================================================
# Table Models
# ============================================================================


class TableDescriptor(BaseModel):
    """Everything known about one table during a single inspection run"""

    qualified_name: str = Field(description="Table name, optionally prefixed by a subschema namespace")
    base_name: str = Field(description="Qualified name with the namespace prefix stripped")
    entity_name: str = Field(description="Normalized class-like name of the entity type")
    columns: list[ColumnDescriptor] = Field(default_factory=list, description="Ordered columns")
    primary_key: str | list[str] | None = Field(default=None, description="Primary key column(s)")
    column_aliases: dict[str, ColumnDescriptor] = Field(
        default_factory=dict, description="Lookup name -> column, raw names first"
    )
    foreign_keys: list[ForeignKeyDescriptor] = Field(
        default_factory=list, description="Foreign keys whose source is this table"
    )
    entity: Any = Field(default=None, description="Synthesized entity type")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_composite(self) -> bool:
        """Whether the primary key spans more than one column"""
        return isinstance(self.primary_key, list) and len(self.primary_key) > 1


# ============================================================================
# Connection Configuration
# ============================================================================


class ConnectionSpec(BaseModel):
    """Where to connect and how to expose the synthesized entity types"""

    url: str = Field(description="SQLAlchemy database URL")
    subschema: str = Field(default="", description="Table-name namespace prefix (e.g. 'dbo')")
    namespace: str = Field(default="", description="Registration path for the entity types (e.g. 'Legacy.Models')")
    echo: bool = Field(default=False, description="Echo SQL emitted by the engine")
