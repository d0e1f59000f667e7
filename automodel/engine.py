"""Database connection and engine management."""

import re
from typing import Any
from urllib.parse import urlparse

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url


def sanitize_connection_string(connection_string: str) -> str:
    """Sanitize a database connection string by removing passwords for logging.

    Args:
        connection_string: The database connection string

    Returns:
        Sanitized connection string with password replaced by ***
    """
    try:
        parsed = urlparse(connection_string)
        if parsed.password:
            return connection_string.replace(f":{parsed.password}@", ":***@")
    except ValueError:
        # Unparseable ports and the like; the regex below still applies
        pass

    # Matches :password@ patterns
    return re.sub(r"://([^:/@]+):([^@/]+)@", r"://\1:***@", connection_string)


def create_database_engine(connection_string: str, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine for the given connection string.

    Args:
        connection_string: The database connection string
        echo: Whether the engine logs emitted SQL

    Returns:
        SQLAlchemy Engine instance
    """
    connect_args: dict[str, Any] = {}

    if make_url(connection_string).get_backend_name() == "sqlite":
        # SQLite connections are created on one thread and may be used from another
        connect_args = {"check_same_thread": False}

    return create_engine(connection_string, connect_args=connect_args, echo=echo)
