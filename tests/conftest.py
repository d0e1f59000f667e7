"""Pytest configuration and shared fixtures"""

import sqlite3
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from automodel.adapters import AdapterRegistry
from automodel.connection import Connection, split_table_name
from automodel.errors import UnsupportedOperation
from automodel.models import ColumnDescriptor, ColumnType, ForeignKeyDescriptor


class FakeConnection(Connection):
    """In-memory connection; tables are keyed by unqualified name.

    Pass foreign_keys=None to simulate an engine without foreign key introspection.
    """

    def __init__(
        self,
        tables: dict[str, list[ColumnDescriptor]],
        primary_keys: dict[str, str | list[str] | None] | None = None,
        foreign_keys: dict[str, list[ForeignKeyDescriptor]] | None = None,
        rows: dict[str, list[dict[str, Any]]] | None = None,
        engine_id: str = "fake",
        listed_names: list[str] | None = None,
    ) -> None:
        self.tables = tables
        self.primary_keys = primary_keys or {}
        self._foreign_keys = foreign_keys
        self.rows = rows or {}
        self.engine_id = engine_id
        self.listed_names = listed_names
        self.calls: Counter = Counter()
        self.queries: list[tuple[str, dict[str, Any]]] = []

    def engine_identifier(self) -> str:
        return self.engine_id

    def list_tables(self) -> list[str]:
        self.calls["list_tables"] += 1
        return list(self.listed_names if self.listed_names is not None else self.tables)

    def describe_columns(self, table_name: str) -> list[ColumnDescriptor]:
        self.calls[("describe_columns", table_name)] += 1
        return self.tables[split_table_name(table_name)[1]]

    def primary_key(self, table_name: str) -> str | list[str] | None:
        self.calls[("primary_key", table_name)] += 1
        return self.primary_keys.get(split_table_name(table_name)[1])

    def foreign_keys(self, table_name: str) -> list[ForeignKeyDescriptor]:
        self.calls[("foreign_keys", table_name)] += 1
        if self._foreign_keys is None:
            raise UnsupportedOperation("foreign_keys")
        return self._foreign_keys.get(split_table_name(table_name)[1], [])

    def fetch_one(self, table_name: str, columns: list[str], criteria: dict[str, Any]) -> dict[str, Any] | None:
        self.queries.append((table_name, criteria))
        for row in self.rows.get(split_table_name(table_name)[1], []):
            if all(row.get(key) == value for key, value in criteria.items()):
                return {col: row.get(col) for col in columns}
        return None


def col(name: str, type: ColumnType = ColumnType.STRING, nullable: bool = True) -> ColumnDescriptor:
    return ColumnDescriptor(name=name, type=type, nullable=nullable)


@pytest.fixture
def fake_connection() -> type[FakeConnection]:
    """Return the FakeConnection class"""
    return FakeConnection


@pytest.fixture
def column() -> Any:
    """Return a ColumnDescriptor factory"""
    return col


@pytest.fixture
def registry() -> AdapterRegistry:
    """Return a fresh, empty adapter registry"""
    return AdapterRegistry()


@pytest.fixture
def shop_connection() -> FakeConnection:
    """Return a connection to a users/orders schema without foreign key introspection"""
    return FakeConnection(
        tables={
            "users": [col("id", ColumnType.INTEGER), col("name"), col("IsActive", ColumnType.BOOLEAN)],
            "orders": [col("id", ColumnType.INTEGER), col("user_id", ColumnType.INTEGER), col("notes")],
        },
        primary_keys={"users": "id", "orders": "id"},
        rows={
            "users": [{"id": 5, "name": "ada", "IsActive": True}],
            "orders": [
                {"id": 1, "user_id": 5, "notes": "first"},
                {"id": 2, "user_id": 99, "notes": "dangling"},
            ],
        },
    )


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Iterator[str]:
    """Create a SQLite database with users, orders and order_items; yield its URL"""
    db_path = tmp_path / "shop.db"

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            IsActive BOOLEAN,
            BirthDate DATE
        )
    """)
    cursor.execute("""
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER REFERENCES users(id),
            notes TEXT
        )
    """)
    cursor.execute("""
        CREATE TABLE order_items (
            order_id INTEGER NOT NULL,
            line INTEGER NOT NULL,
            quantity INTEGER,
            PRIMARY KEY (order_id, line),
            FOREIGN KEY (order_id) REFERENCES orders(id)
        )
    """)

    cursor.executemany(
        "INSERT INTO users (id, name, IsActive, BirthDate) VALUES (?, ?, ?, ?)",
        [(5, "ada", 1, "1815-12-10"), (6, "grace", 0, "1906-12-09")],
    )
    cursor.executemany(
        "INSERT INTO orders (id, user_id, notes) VALUES (?, ?, ?)",
        [(1, 5, "first"), (2, 99, "dangling"), (3, None, "anonymous")],
    )
    cursor.executemany(
        "INSERT INTO order_items (order_id, line, quantity) VALUES (?, ?, ?)",
        [(1, 1, 3), (1, 2, 1)],
    )

    conn.commit()
    conn.close()

    yield f"sqlite:///{db_path}"


@pytest.fixture
def sqlite_db_without_fks(tmp_path: Path) -> Iterator[str]:
    """Create a SQLite database whose relationships exist only by naming convention"""
    db_path = tmp_path / "legacy.db"

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
    cursor.execute("CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER, notes TEXT)")
    cursor.execute("INSERT INTO users (id, name) VALUES (5, 'ada')")
    cursor.executemany(
        "INSERT INTO orders (id, user_id, notes) VALUES (?, ?, ?)",
        [(1, 5, "first"), (2, 42, "orphan")],
    )
    conn.commit()
    conn.close()

    yield f"sqlite:///{db_path}"
