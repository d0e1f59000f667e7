"""Runtime entity types for existing databases.

This package inspects a database schema through pluggable adapters and
synthesizes one related entity type per table.
"""

from automodel.adapters import AdapterRegistry, adapter_for, adapters, register_adapter
from automodel.api import automodel, connect
from automodel.connection import Connection, SqlAlchemyConnection
from automodel.entities import BelongsTo, Entity, EntityType
from automodel.errors import (
    AdapterAlreadyRegistered,
    AutomodelError,
    CannotFindOnCompoundPrimaryKey,
    NameAlreadyRegistered,
    UnknownPrimaryKey,
    UnregisteredAdapter,
    UnsupportedOperation,
)
from automodel.inspector import SchemaInspector
from automodel.mapping import inspect
from automodel.models import (
    AdapterDescriptor,
    ColumnDescriptor,
    ColumnType,
    ConnectionSpec,
    ForeignKeyDescriptor,
    TableDescriptor,
)
from automodel.registration import Namespace, namespace_path, register_class, register_entities

__all__ = [
    # Entry points
    "automodel",
    "connect",
    "inspect",
    # Adapters
    "AdapterRegistry",
    "adapters",
    "register_adapter",
    "adapter_for",
    # Connections and inspection
    "Connection",
    "SqlAlchemyConnection",
    "SchemaInspector",
    # Entities and registration
    "BelongsTo",
    "Entity",
    "EntityType",
    "Namespace",
    "namespace_path",
    "register_class",
    "register_entities",
    # Models
    "AdapterDescriptor",
    "ColumnDescriptor",
    "ColumnType",
    "ConnectionSpec",
    "ForeignKeyDescriptor",
    "TableDescriptor",
    # Errors
    "AutomodelError",
    "AdapterAlreadyRegistered",
    "UnregisteredAdapter",
    "CannotFindOnCompoundPrimaryKey",
    "UnknownPrimaryKey",
    "UnsupportedOperation",
    "NameAlreadyRegistered",
]
