# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the global built-in types."""

import pytest

from typegraph.compiler.builtin_types import (
    ERROR_RESPONSE_BODY,
    OFFSET_PAGINATION,
    filter_type_for,
    one_or_many,
    register_enum_filter,
    register_error_types,
    register_filter_type,
    register_pagination_types,
    register_sort_direction,
)
from typegraph.errors import UnknownFilterTypeError
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import ArrayField, ObjectField, ReferenceField, TypeKind
from typegraph.registry import TypeRegistry

# ###############
# Filter Types
# ###############


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ScalarKind.STRING, "string_filter"),
        (ScalarKind.TIME, "string_filter"),
        (ScalarKind.INTEGER, "integer_filter"),
        (ScalarKind.DECIMAL, "decimal_filter"),
        (ScalarKind.NUMBER, "number_filter"),
        (ScalarKind.DATE, "date_filter"),
        (ScalarKind.DATETIME, "datetime_filter"),
        (ScalarKind.UUID, "uuid_filter"),
        (ScalarKind.BOOLEAN, "boolean_filter"),
        (ScalarKind.OBJECT, None),
        (ScalarKind.ARRAY, None),
        (ScalarKind.UNKNOWN, None),
    ],
)
def test_filter_type_for(kind: ScalarKind, expected: str | None) -> None:
    assert filter_type_for(kind) == expected


def test_filter_type_for_nullable_attribute() -> None:
    assert filter_type_for(ScalarKind.DATE, nullable=True) == "nullable_date_filter"
    assert filter_type_for(ScalarKind.OBJECT, nullable=True) is None


def test_string_filter_operators() -> None:
    registry = TypeRegistry()
    definition = register_filter_type(registry, "string_filter")

    assert definition.name == "string_filter"
    assert list(definition.fields) == ["eq", "contains", "starts_with", "ends_with", "in"]
    assert all(spec.optional for spec in definition.fields.values())
    assert registry.get("string_filter_between") is None


def test_comparable_filter_registers_range_type() -> None:
    registry = TypeRegistry()
    definition = register_filter_type(registry, "integer_filter")

    assert list(definition.fields) == ["eq", "gt", "gte", "lt", "lte", "in", "between"]
    assert definition.fields["between"].to == "integer_filter_between"
    between = registry.get("integer_filter_between")
    assert list(between.fields) == ["from", "to"]
    assert between.fields["from"].type is ScalarKind.INTEGER


def test_nullable_filter_adds_null_flag() -> None:
    registry = TypeRegistry()
    definition = register_filter_type(registry, "nullable_date_filter")

    assert definition.name == "nullable_date_filter"
    assert definition.fields["null"].type is ScalarKind.BOOLEAN
    assert definition.fields["between"].to == "date_filter_between"


def test_boolean_filter_has_no_in_list() -> None:
    registry = TypeRegistry()
    assert list(register_filter_type(registry, "boolean_filter").fields) == ["eq"]


def test_unknown_filter_type_raises() -> None:
    with pytest.raises(UnknownFilterTypeError, match="json_filter"):
        register_filter_type(TypeRegistry(), "json_filter")


def test_filter_registration_is_shared() -> None:
    registry = TypeRegistry()
    assert register_filter_type(registry, "uuid_filter") is register_filter_type(registry, "uuid_filter")


# ###############
# Enums, Pagination and Errors
# ###############


def test_enum_filter_accepts_value_or_operators() -> None:
    registry = TypeRegistry()
    definition = register_enum_filter(registry, "invoice_status")

    assert definition.name == "invoice_status_filter"
    assert definition.kind is TypeKind.UNION
    value, operators = (variant.type for variant in definition.variants)
    assert isinstance(value, ReferenceField) and value.to == "invoice_status"
    assert isinstance(operators, ObjectField)
    assert list(operators.shape) == ["eq", "in"]


def test_sort_direction() -> None:
    registry = TypeRegistry()
    definition = register_sort_direction(registry)
    assert definition.kind is TypeKind.ENUM
    assert definition.values == ["asc", "desc"]


def test_pagination_types() -> None:
    registry = TypeRegistry()
    register_pagination_types(registry)

    offset = registry.get(OFFSET_PAGINATION)
    assert list(offset.fields) == ["current", "next", "prev", "total", "items"]
    assert offset.fields["next"].nullable
    assert list(registry.get("cursor_pagination").fields) == ["next", "prev"]


def test_error_types() -> None:
    registry = TypeRegistry()
    body = register_error_types(registry)

    assert body.name == ERROR_RESPONSE_BODY
    assert body.fields["layer"].to == "layer"
    assert body.fields["issues"].of.to == "issue"
    assert registry.get("layer").values == ["http", "contract", "domain"]
    assert list(registry.get("issue").fields) == ["code", "detail", "path", "pointer", "meta"]


def test_one_or_many() -> None:
    spec = one_or_many("post_filter")
    single, many = (variant.type for variant in spec.variants)
    assert spec.optional
    assert single.to == "post_filter"
    assert isinstance(many, ArrayField)
    assert many.of.to == "post_filter"
