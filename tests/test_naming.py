"""Tests for name normalization"""

import pytest

from automodel.models import ColumnDescriptor, ColumnType
from automodel.naming import (
    camelize,
    normalize_column_name,
    normalize_table_name,
    pluralize,
    singularize,
    underscore,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("UserId", "user_id"),
        ("IsActive", "is_active"),
        ("BirthDate", "birth_date"),
        ("HTMLParser", "html_parser"),
        ("ID", "id"),
        ("order-items", "order_items"),
        ("Order Items", "order_items"),
        ("already_snake", "already_snake"),
    ],
)
def test_underscore(raw: str, expected: str) -> None:
    assert underscore(raw) == expected


def test_normalize_column_name() -> None:
    """Test snake casing of non-boolean columns"""
    assert normalize_column_name(ColumnDescriptor(name="UserId", type=ColumnType.INTEGER)) == "user_id"
    assert normalize_column_name(ColumnDescriptor(name="FirstName", type=ColumnType.STRING)) == "first_name"


def test_temporal_columns_get_no_special_treatment() -> None:
    """Test that date/time columns are only snake cased"""
    assert normalize_column_name(ColumnDescriptor(name="BirthDate", type=ColumnType.DATE)) == "birth_date"
    assert normalize_column_name(ColumnDescriptor(name="CreatedOn", type=ColumnType.DATETIME)) == "created_on"


def test_boolean_columns_lose_is_prefix() -> None:
    """Test the boolean alias rule"""
    assert normalize_column_name(ColumnDescriptor(name="IsActive", type=ColumnType.BOOLEAN)) == "active"
    assert normalize_column_name(ColumnDescriptor(name="is_deleted", type=ColumnType.BOOLEAN)) == "deleted"
    assert normalize_column_name(ColumnDescriptor(name="Active", type=ColumnType.BOOLEAN)) == "active"


def test_is_prefix_kept_for_non_boolean_columns() -> None:
    assert normalize_column_name(ColumnDescriptor(name="IsoCode", type=ColumnType.STRING)) == "iso_code"
    assert normalize_column_name(ColumnDescriptor(name="is_flag", type=ColumnType.INTEGER)) == "is_flag"


@pytest.mark.parametrize("name", ["user_id", "first_name", "birth_date", "id", "notes"])
def test_normalizing_is_idempotent(name: str) -> None:
    """Test that normalized non-boolean names normalize to themselves"""
    column = ColumnDescriptor(name=name, type=ColumnType.STRING)
    assert normalize_column_name(column) == name


@pytest.mark.parametrize(
    ("base_name", "entity_name"),
    [
        ("order_items", "OrderItem"),
        ("Orders", "Order"),
        ("users", "User"),
        ("categories", "Category"),
        ("addresses", "Address"),
        ("status", "Status"),
        ("order_statuses", "OrderStatus"),
        ("people", "Person"),
        ("OrderItem", "OrderItem"),
        ("2020_sales", "_2020Sale"),
    ],
)
def test_normalize_table_name(base_name: str, entity_name: str) -> None:
    assert normalize_table_name(base_name) == entity_name


@pytest.mark.parametrize(
    ("singular", "plural"),
    [
        ("user", "users"),
        ("User", "Users"),
        ("category", "categories"),
        ("day", "days"),
        ("box", "boxes"),
        ("status", "statuses"),
        ("person", "people"),
    ],
)
def test_pluralize(singular: str, plural: str) -> None:
    assert pluralize(singular) == plural


@pytest.mark.parametrize(
    ("plural", "singular"),
    [
        ("users", "user"),
        ("boxes", "box"),
        ("class", "class"),
        ("children", "child"),
        ("buses", "bus"),
        ("statuses", "status"),
        ("aliases", "alias"),
        ("viruses", "virus"),
        ("houses", "house"),
        ("cases", "case"),
        ("warehouses", "warehouse"),
    ],
)
def test_singularize(plural: str, singular: str) -> None:
    assert singularize(plural) == singular


def test_camelize() -> None:
    assert camelize("order_item") == "OrderItem"
    assert camelize("_leading") == "Leading"
