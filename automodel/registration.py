"""Registration of synthesized entity types into nested namespaces."""

import logging
import re
from collections.abc import Iterator
from typing import Any

from automodel.errors import NameAlreadyRegistered
from automodel.models import TableDescriptor

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = re.compile(r"::|\.")
_PATH_ATTRIBUTE = "_path"


class Namespace:
    """Attribute-style container for registered objects and child namespaces.

    Every public attribute is a registered name; see namespace_path() for the location.
    """

    def __init__(self, path: str = "") -> None:
        self._path = path

    def __iter__(self) -> Iterator[str]:
        return (name for name in vars(self) if name != _PATH_ATTRIBUTE)

    def __contains__(self, name: str) -> bool:
        return name != _PATH_ATTRIBUTE and name in vars(self)

    def __repr__(self) -> str:
        return f"<Namespace {self._path or '<root>'}: {', '.join(self)}>"


def namespace_path(namespace: Namespace) -> str:
    """Return the dotted path of a namespace from its root, '' for the root itself."""
    return namespace._path


def resolve_namespace(root: Namespace, within: str = "") -> Namespace:
    """Walk a path like 'Legacy.Models' (or 'Legacy::Models') from root, creating missing namespaces.

    Raises:
        NameAlreadyRegistered: If a path segment is taken by something other than a namespace
    """
    namespace = root
    for segment in (s for s in NAMESPACE_SEPARATOR.split(within) if s):
        child = vars(namespace).get(segment) if segment != _PATH_ATTRIBUTE else namespace_path(namespace)
        if child is None:
            path = namespace_path(namespace)
            child = Namespace(f"{path}.{segment}" if path else segment)
            setattr(namespace, segment, child)
        elif not isinstance(child, Namespace):
            raise NameAlreadyRegistered(segment, namespace_path(namespace))
        namespace = child
    return namespace


def register_class(root: Namespace, obj: Any, name: str, within: str = "") -> Namespace:
    """Register obj under name in the namespace at path within.

    Registering the same object twice is a no-op.

    Returns:
        The namespace obj was registered in

    Raises:
        NameAlreadyRegistered: If a different object already has that name
    """
    namespace = resolve_namespace(root, within)

    existing = vars(namespace).get(name)
    if name == _PATH_ATTRIBUTE or (existing is not None and existing is not obj):
        raise NameAlreadyRegistered(name, namespace_path(namespace))

    setattr(namespace, name, obj)
    return namespace


def register_entities(tables: list[TableDescriptor], root: Namespace, within: str = "") -> Namespace:
    """Register every table's entity type under its entity name."""
    namespace = resolve_namespace(root, within)
    for table in tables:
        register_class(namespace, table.entity, table.entity_name)
        logger.debug(f"Registered {table.entity_name} for '{table.qualified_name}' in '{namespace_path(namespace)}'")
    return namespace
