"""Registry of per-engine adapters overriding native schema introspection."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from automodel.errors import AdapterAlreadyRegistered
from automodel.models import AdapterDescriptor

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Maps database engine identifiers to adapter descriptors.

    Registration is serialized with a lock so two threads registering the same
    engine race deterministically: the first wins, the second raises
    AdapterAlreadyRegistered. Lookups never block.
    """

    def __init__(self) -> None:
        self._adapters: dict[str, AdapterDescriptor] = {}
        self._lock = threading.Lock()

    def register(
        self,
        engine_id: str,
        tables: Callable[..., Any] | None = None,
        columns: Callable[..., Any] | None = None,
        primary_key: Callable[..., Any] | None = None,
        foreign_keys: Callable[..., Any] | None = None,
        native_fallback: bool = True,
    ) -> AdapterDescriptor:
        """Register probe functions for one database engine.

        Args:
            engine_id: Engine identifier (e.g. 'mssql'), compared case-insensitively
            tables: Probe returning table names, called as tables(connection)
            columns: Probe returning columns, called as columns(connection, table)
            primary_key: Probe returning primary key column(s), called as primary_key(connection, table)
            foreign_keys: Probe returning foreign keys, called as foreign_keys(connection, table)
            native_fallback: Whether missing probes fall back to the connection's native capability

        Returns:
            The stored AdapterDescriptor

        Raises:
            AdapterAlreadyRegistered: If engine_id already has an adapter
        """
        descriptor = AdapterDescriptor(
            engine_id=engine_id,
            tables=tables,
            columns=columns,
            primary_key=primary_key,
            foreign_keys=foreign_keys,
            native_fallback=native_fallback,
        )

        with self._lock:
            if descriptor.engine_id in self._adapters:
                raise AdapterAlreadyRegistered(descriptor.engine_id)
            self._adapters[descriptor.engine_id] = descriptor

        logger.debug(f"Registered adapter for engine '{descriptor.engine_id}'")
        return descriptor

    def lookup(self, engine_id: str) -> AdapterDescriptor:
        """Return the adapter for engine_id, or an empty descriptor if none is registered."""
        key = engine_id.strip().lower()
        descriptor = self._adapters.get(key)
        if descriptor is None:
            return AdapterDescriptor(engine_id=key)
        return descriptor

    def __contains__(self, engine_id: str) -> bool:
        return engine_id.strip().lower() in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)


# Process-wide default registry
adapters = AdapterRegistry()


def register_adapter(engine_id: str, **probes: Any) -> AdapterDescriptor:
    """Register an adapter in the process-wide registry."""
    return adapters.register(engine_id, **probes)


def adapter_for(engine_id: str) -> AdapterDescriptor:
    """Look up an adapter in the process-wide registry."""
    return adapters.lookup(engine_id)
