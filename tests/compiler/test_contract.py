# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the standard CRUD actions."""

import pytest

from typegraph.compiler.contract import STANDARD_ACTIONS, build_actions
from typegraph.compiler.type_graph import TypeGraphCompiler
from typegraph.model.descriptors import (
    AssociationDescriptor,
    AttributeDescriptor,
    ResourceCatalog,
    ResourceDescriptor,
)
from typegraph.model.types import ArrayField, ObjectField, ReferenceField, UnionField
from typegraph.registry import Scope, TypeRegistry

# ###############
# Test Helpers
# ###############


def _invoice() -> ResourceDescriptor:
    return ResourceDescriptor(
        name="invoice",
        attributes={
            "number": AttributeDescriptor(name="number", filterable=True, sortable=True, writable=["create"]),
            "total": AttributeDescriptor(name="total", type="decimal", writable=["create", "update"]),
        },
        associations={"customer": AssociationDescriptor(name="customer", target="customer")},
    )


def _customer() -> ResourceDescriptor:
    return ResourceDescriptor(name="customer", contract=False)


def _compiled(resource: ResourceDescriptor) -> tuple[TypeRegistry, Scope]:
    registry = TypeRegistry()
    scope = TypeGraphCompiler(registry, ResourceCatalog([resource, _customer()])).compile(resource)
    return registry, scope


def _actions(resource: ResourceDescriptor, names=STANDARD_ACTIONS) -> dict[str, object]:
    registry, scope = _compiled(resource)
    return {action.name: action for action in build_actions(registry, scope, resource, names)}


# ###############
# Actions
# ###############


def test_standard_action_routes() -> None:
    actions = _actions(_invoice())

    assert list(actions) == ["index", "show", "create", "update", "destroy"]
    assert [(a.method, a.path) for a in actions.values()] == [
        ("GET", "/invoices"),
        ("GET", "/invoices/{id}"),
        ("POST", "/invoices"),
        ("PATCH", "/invoices/{id}"),
        ("DELETE", "/invoices/{id}"),
    ]
    assert actions["update"].raises == ["not_found", "unprocessable_entity"]


def test_index_query_and_response() -> None:
    index = _actions(_invoice(), ["index"])["index"]
    query = index.request.query

    assert list(query) == ["filter", "sort", "page", "include"]
    assert isinstance(query["filter"], UnionField)
    assert query["filter"].variants[0].type.to == "invoice_filter"
    assert query["sort"].variants[1].type.of.to == "invoice_sort"
    assert query["page"].shape["size"].min == 1
    assert query["include"] == ReferenceField(to="invoice_include", optional=True)

    body = index.response.body
    assert isinstance(body, ObjectField)
    assert isinstance(body.shape["invoices"], ArrayField)
    assert body.shape["invoices"].of.to == "invoice"
    assert body.shape["pagination"].to == "offset_pagination"


def test_index_skips_missing_filter_and_sort() -> None:
    resource = ResourceDescriptor(name="tag", attributes={"label": AttributeDescriptor(name="label")})
    index = _actions(resource, ["index"])["index"]
    assert list(index.request.query) == ["page"]


def test_member_actions_reference_resource_types() -> None:
    actions = _actions(_invoice())

    assert actions["show"].response.body.shape == {"invoice": ReferenceField(to="invoice")}
    assert actions["create"].request.body == {"invoice": ReferenceField(to="invoice_create_payload")}
    assert actions["update"].request.body == {"invoice": ReferenceField(to="invoice_update_payload")}
    assert actions["destroy"].response.body is None
    assert actions["destroy"].request.body == {}


def test_create_without_writable_attributes_has_empty_body() -> None:
    resource = ResourceDescriptor(name="tag", attributes={"label": AttributeDescriptor(name="label")})
    assert _actions(resource, ["create"])["create"].request.body == {}


def test_actions_that_raise_register_error_types() -> None:
    registry, scope = _compiled(_invoice())
    build_actions(registry, scope, _invoice(), ["destroy"])
    assert registry.get("error_response_body") is not None


def test_no_actions_register_no_error_types() -> None:
    registry, scope = _compiled(_invoice())
    assert build_actions(registry, scope, _invoice(), []) == []
    assert registry.get("error_response_body") is None
    assert registry.get("offset_pagination") is None


def test_unknown_action_raises() -> None:
    registry, scope = _compiled(_invoice())
    with pytest.raises(ValueError, match="archive"):
        build_actions(registry, scope, _invoice(), ["archive"])
