"""Errors raised by automodel."""


class AutomodelError(Exception):
    """Base class for every automodel error."""


class AdapterAlreadyRegistered(AutomodelError):
    """An adapter was registered twice for the same engine identifier."""

    def __init__(self, engine_id: str) -> None:
        self.engine_id = engine_id
        super().__init__(f"An adapter is already registered for engine '{engine_id}'")


class UnregisteredAdapter(AutomodelError):
    """An operation needed an adapter probe but none exists and native fallback is disabled."""

    def __init__(self, engine_id: str, operation: str | None = None) -> None:
        self.engine_id = engine_id
        self.operation = operation
        message = f"No adapter registered for engine '{engine_id}'"
        if operation:
            message += f" that provides '{operation}'"
        super().__init__(message)


class CannotFindOnCompoundPrimaryKey(AutomodelError):
    """Lookup-by-key was attempted on an entity whose table has a composite primary key."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Cannot find '{entity_name}' by key: the table has a compound primary key")


class UnknownPrimaryKey(AutomodelError):
    """Lookup-by-key was attempted on an entity whose table has no primary key."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Cannot find '{entity_name}' by key: the table has no primary key")


class UnsupportedOperation(AutomodelError, NotImplementedError):
    """A connection cannot perform the requested introspection operation."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Operation '{operation}' is not supported by this connection")


class NameAlreadyRegistered(AutomodelError):
    """A different object is already registered under the same name in a namespace."""

    def __init__(self, name: str, namespace: str) -> None:
        self.name = name
        self.namespace = namespace
        super().__init__(f"'{name}' is already registered in namespace '{namespace or '<root>'}'")
