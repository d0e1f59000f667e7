"""Tests for namespace registration"""

from typing import Any

import pytest

from automodel.errors import NameAlreadyRegistered
from automodel.mapping import inspect
from automodel.registration import Namespace, namespace_path, register_class, register_entities, resolve_namespace


def test_register_at_root() -> None:
    root = Namespace()
    marker = object()

    namespace = register_class(root, marker, "Thing")

    assert namespace is root
    assert root.Thing is marker
    assert "Thing" in root
    assert list(root) == ["Thing"]


def test_missing_namespaces_are_created() -> None:
    root = Namespace()
    marker = object()

    namespace = register_class(root, marker, "Thing", within="Legacy::Models")

    assert isinstance(root.Legacy, Namespace)
    assert root.Legacy.Models is namespace
    assert namespace_path(namespace) == "Legacy.Models"
    assert root.Legacy.Models.Thing is marker
    # Dotted and double-colon paths are equivalent
    assert resolve_namespace(root, "Legacy.Models") is namespace


def test_registering_same_object_is_idempotent() -> None:
    root = Namespace()
    marker = object()

    register_class(root, marker, "Thing", within="Models")
    register_class(root, marker, "Thing", within="Models")

    assert root.Models.Thing is marker


def test_registering_different_object_fails() -> None:
    root = Namespace()
    register_class(root, object(), "Thing", within="Models")

    with pytest.raises(NameAlreadyRegistered) as exc_info:
        register_class(root, object(), "Thing", within="Models")

    assert exc_info.value.name == "Thing"
    assert exc_info.value.namespace == "Models"


def test_path_segment_taken_by_non_namespace() -> None:
    root = Namespace()
    register_class(root, object(), "Models")

    with pytest.raises(NameAlreadyRegistered):
        register_class(root, object(), "Thing", within="Models")


def test_register_entities(shop_connection: Any, registry: Any) -> None:
    """Test that synthesis output is registered under entity names"""
    tables = inspect(shop_connection, registry=registry)
    root = Namespace()

    models = register_entities(tables, root, within="Shop")

    assert models is root.Shop
    assert models.User is tables[0].entity
    assert models.Order is tables[1].entity
    assert models.Order.find(1).user.name == "ada"


def test_names_that_look_like_internals_can_be_registered() -> None:
    """Test that 'path' and leading-underscore entity names are ordinary names"""
    root = Namespace()
    path_marker, sale_marker = object(), object()

    register_class(root, path_marker, "path")
    models = register_class(root, sale_marker, "_2020Sale", within="path2::path")

    assert root.path is path_marker
    assert models is root.path2.path
    assert root.path2.path._2020Sale is sale_marker
    assert namespace_path(models) == "path2.path"
    assert sorted(root) == ["path", "path2"]
    assert "_2020Sale" in models


def test_internal_path_slot_is_reserved() -> None:
    root = Namespace()

    with pytest.raises(NameAlreadyRegistered):
        register_class(root, object(), "_path")
    with pytest.raises(NameAlreadyRegistered):
        register_class(root, object(), "Thing", within="_path")

    assert namespace_path(root) == ""
