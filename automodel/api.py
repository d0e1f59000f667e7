"""One-call entry point: connect, inspect, and register entity types."""

import logging

from sqlalchemy.engine import Engine

from automodel.adapters import AdapterRegistry
from automodel.connection import Connection, SqlAlchemyConnection
from automodel.engine import sanitize_connection_string
from automodel.mapping import inspect, normalize_subschema
from automodel.models import ConnectionSpec
from automodel.registration import Namespace, register_class, register_entities

logger = logging.getLogger(__name__)


def connect(spec: ConnectionSpec) -> SqlAlchemyConnection:
    """Open a SQLAlchemy-backed connection scoped to its subschema."""
    schema = normalize_subschema(spec.subschema).rstrip(".") or None
    logger.info(f"Connecting to {sanitize_connection_string(spec.url)}")
    return SqlAlchemyConnection.from_url(spec.url, schema=schema, echo=spec.echo)


def automodel(
    target: str | ConnectionSpec | Engine | Connection,
    subschema: str | None = None,
    namespace: str | None = None,
    root: Namespace | None = None,
    registry: AdapterRegistry | None = None,
) -> Namespace:
    """Synthesize entity types for every table of a database and register them.

    Args:
        target: Database URL, ConnectionSpec, SQLAlchemy engine, or open Connection
        subschema: Namespace prefix for table names (overrides ConnectionSpec.subschema)
        namespace: Registration path such as 'Legacy.Models' (overrides ConnectionSpec.namespace)
        root: Namespace to register into (default: a new, empty one)
        registry: Adapter registry to consult (default: the process-wide registry)

    Returns:
        The namespace holding the entity types, with the open connection
        registered alongside them as 'connection'

    Example:
        models = automodel("sqlite:///legacy.db")
        order = models.Order.find(1)
        order.user  # belongs-to relationship inferred from orders.user_id
    """
    if isinstance(target, str):
        target = ConnectionSpec(url=target)

    # Only connections opened here are closed on failure
    owns_connection = isinstance(target, ConnectionSpec)
    if isinstance(target, ConnectionSpec):
        subschema = target.subschema if subschema is None else subschema
        namespace = target.namespace if namespace is None else namespace
        connection: Connection = connect(target.model_copy(update={"subschema": subschema}))
    elif isinstance(target, Engine):
        schema = normalize_subschema(subschema or "").rstrip(".") or None
        connection = SqlAlchemyConnection(target, schema=schema)
    else:
        connection = target

    try:
        tables = inspect(connection, subschema=subschema or "", registry=registry)

        models = register_entities(tables, root if root is not None else Namespace(), within=namespace or "")
        register_class(models, connection, "connection")
    except BaseException:
        if owns_connection:
            connection.close()
        raise
    return models
