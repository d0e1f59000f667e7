"""Data-driven entity types synthesized from table descriptors.

An EntityType wraps one TableDescriptor; every attribute and relationship
access on its Entity instances is resolved through the descriptor's column
aliases and the type's relationship table, so no classes are generated.
"""

import logging
from dataclasses import dataclass
from typing import Any

from automodel.connection import Connection
from automodel.errors import CannotFindOnCompoundPrimaryKey, UnknownPrimaryKey
from automodel.models import ColumnDescriptor, TableDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BelongsTo:
    """Many-to-one relationship from a source entity to the target entity its foreign key points at."""

    field: str
    target: "EntityType"
    foreign_key: str
    primary_key: str
    constraint_name: str = ""

    def resolve(self, instance: "Entity") -> "Entity | None":
        """Load the target row referenced by instance, or None if there is none."""
        value = instance[self.foreign_key]
        if value is None:
            return None
        return self.target.find_by(**{self.primary_key: value})


class EntityType:
    """The synthesized type representing one database table."""

    def __init__(self, table: TableDescriptor, connection: Connection) -> None:
        self.table = table
        self.connection = connection
        self.relationships: dict[str, BelongsTo] = {}

    @property
    def name(self) -> str:
        return self.table.entity_name

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.table.columns]

    def column_for(self, name: str) -> ColumnDescriptor | None:
        """Resolve a raw column name or normalized alias to its column."""
        return self.table.column_aliases.get(name)

    def add_relationship(self, relationship: BelongsTo, *aliases: str) -> list[str]:
        """Attach a relationship under its field name and any aliases.

        Names already taken by another relationship are skipped.

        Returns:
            The names the relationship was attached under
        """
        attached = []
        for field in dict.fromkeys((relationship.field, *aliases)):
            existing = self.relationships.get(field)
            if existing is not None and existing is not relationship:
                logger.warning(
                    f"{self.name}.{field} already refers to {existing.target.name}; "
                    f"skipping relationship to {relationship.target.name}"
                )
                continue
            self.relationships[field] = relationship
            attached.append(field)
        return attached

    def find(self, key: Any) -> "Entity | None":
        """Look up one row by primary key.

        Raises:
            CannotFindOnCompoundPrimaryKey: If the table has a composite primary key
            UnknownPrimaryKey: If the table has no primary key
        """
        if self.table.is_composite:
            raise CannotFindOnCompoundPrimaryKey(self.name)

        pk = self.table.primary_key
        if isinstance(pk, list):
            pk = pk[0] if pk else None
        if pk is None:
            raise UnknownPrimaryKey(self.name)

        return self._fetch({pk: key})

    def find_by(self, **criteria: Any) -> "Entity | None":
        """Return the first row matching every criterion; keys may be raw column names or aliases."""
        resolved = {}
        for name, value in criteria.items():
            col = self.column_for(name)
            if col is None:
                raise AttributeError(f"'{self.name}' has no attribute '{name}'")
            resolved[col.name] = value

        return self._fetch(resolved)

    def new(self, **values: Any) -> "Entity":
        """Build an unsaved instance from raw column names or aliases."""
        instance = Entity(self)
        for name, value in values.items():
            setattr(instance, name, value)
        return instance

    def _fetch(self, criteria: dict[str, Any]) -> "Entity | None":
        row = self.connection.fetch_one(self.table.qualified_name, self.column_names, criteria)
        if row is None:
            return None
        return Entity(self, row)

    def __repr__(self) -> str:
        return f"<EntityType {self.name} ({self.table.qualified_name})>"


class Entity:
    """One row of an entity type, read and written through the type's schema."""

    def __init__(self, entity_type: EntityType, values: dict[str, Any] | None = None) -> None:
        object.__setattr__(self, "_entity_type", entity_type)
        object.__setattr__(self, "_values", dict(values or {}))
        object.__setattr__(self, "_associations", {})

    @property
    def entity_type(self) -> EntityType:
        return self._entity_type

    def _column(self, name: str) -> ColumnDescriptor:
        col = self._entity_type.column_for(name)
        if col is None:
            raise AttributeError(f"'{self._entity_type.name}' object has no attribute '{name}'")
        return col

    def __getattr__(self, name: str) -> Any:
        entity_type = self.__dict__.get("_entity_type")
        if entity_type is None:
            raise AttributeError(name)

        col = entity_type.column_for(name)
        if col is not None:
            return self._values.get(col.name)

        relationship = entity_type.relationships.get(name)
        if relationship is not None:
            # Resolved on first access, shared between a relationship's field and alias
            if relationship.field not in self._associations:
                self._associations[relationship.field] = relationship.resolve(self)
            return self._associations[relationship.field]

        raise AttributeError(f"'{entity_type.name}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        col = self._column(name)
        self._values[col.name] = value

        for relationship in self._entity_type.relationships.values():
            if relationship.foreign_key == col.name:
                self._associations.pop(relationship.field, None)

    def __getitem__(self, name: str) -> Any:
        col = self._entity_type.column_for(name)
        if col is None:
            raise KeyError(name)
        return self._values.get(col.name)

    def __setitem__(self, name: str, value: Any) -> None:
        if self._entity_type.column_for(name) is None:
            raise KeyError(name)
        setattr(self, name, value)

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        names.update(self._entity_type.table.column_aliases)
        names.update(self._entity_type.relationships)
        return sorted(names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return other._entity_type is self._entity_type and other._values == self._values

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Return the row's values keyed by raw column name."""
        return dict(self._values)

    def __repr__(self) -> str:
        values = " ".join(f"{key}={value!r}" for key, value in self._values.items())
        return f"<{self._entity_type.name} {values}>" if values else f"<{self._entity_type.name}>"
