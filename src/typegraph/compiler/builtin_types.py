# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Built-in API-level types registered in the global scope on demand.

Filter objects for every filterable scalar kind, the ``sort_direction`` enum,
pagination metadata and the error response body are shared by all resource
scopes. They are only registered when something refers to them, so the
surface of a compiled API never carries unused globals.
"""

from __future__ import annotations

from dataclasses import dataclass

from typegraph.errors import UnknownFilterTypeError
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import (
    ArrayField,
    ObjectField,
    ReferenceField,
    ScalarField,
    TypeDefinition,
    TypeKind,
    UnionField,
    UnionVariant,
)
from typegraph.registry.store import TypeRegistry

# ###############
# Public Interface
# ###############

SORT_DIRECTION = "sort_direction"
OFFSET_PAGINATION = "offset_pagination"
CURSOR_PAGINATION = "cursor_pagination"
LAYER = "layer"
ISSUE = "issue"
ERROR_RESPONSE_BODY = "error_response_body"

NULLABLE_PREFIX = "nullable_"


def filter_type_for(kind: ScalarKind, nullable: bool = False) -> str | None:
    """Return the global filter type name for attributes of *kind*.

    Returns None for kinds that cannot be filtered (objects, arrays and
    unknown values).
    """
    base = _FILTER_KIND_MAP.get(kind)
    if base is None:
        return None
    return f"{NULLABLE_PREFIX}{base}" if nullable else base


def register_filter_type(registry: TypeRegistry, name: str) -> TypeDefinition:
    """Register the global filter object *name* and its range dependency.

    ``nullable_`` variants carry an extra ``null`` flag.

    Raises:
        UnknownFilterTypeError: If *name* is not a known filter type.
    """
    nullable = name.startswith(NULLABLE_PREFIX)
    base = name.removeprefix(NULLABLE_PREFIX)
    spec = _FILTER_DEFINITIONS.get(base)
    if spec is None:
        raise UnknownFilterTypeError(name)

    between = None
    if spec.between:
        between = f"{base}_between"
        registry.register(registry.global_scope, between, TypeKind.OBJECT, _range_builder(spec.kind))

    def _build(definition: TypeDefinition) -> None:
        for operator in spec.operators:
            definition.fields[operator] = ScalarField(type=spec.kind, optional=True)
        if spec.in_list:
            definition.fields["in"] = ArrayField(of=ScalarField(type=spec.kind), optional=True)
        if between is not None:
            definition.fields["between"] = ReferenceField(to=between, optional=True)
        if nullable:
            definition.fields["null"] = ScalarField(type=ScalarKind.BOOLEAN, optional=True)

    return registry.register(registry.global_scope, name, TypeKind.OBJECT, _build)


def register_enum_filter(registry: TypeRegistry, enum_name: str) -> TypeDefinition:
    """Register ``{enum_name}_filter``: the enum value itself or ``{eq, in}``."""

    def _build(definition: TypeDefinition) -> None:
        definition.variants = [
            UnionVariant(type=ReferenceField(to=enum_name)),
            UnionVariant(
                type=ObjectField(
                    shape={
                        "eq": ReferenceField(to=enum_name, optional=True),
                        "in": ArrayField(of=ReferenceField(to=enum_name), optional=True),
                    }
                )
            ),
        ]

    return registry.register(registry.global_scope, f"{enum_name}_filter", TypeKind.UNION, _build)


def register_sort_direction(registry: TypeRegistry) -> TypeDefinition:
    return registry.register_enum(registry.global_scope, SORT_DIRECTION, ["asc", "desc"])


def register_pagination_types(registry: TypeRegistry) -> None:
    """Register offset and cursor pagination metadata objects."""

    def _offset(definition: TypeDefinition) -> None:
        definition.fields = {
            "current": ScalarField(type=ScalarKind.INTEGER),
            "next": ScalarField(type=ScalarKind.INTEGER, nullable=True, optional=True),
            "prev": ScalarField(type=ScalarKind.INTEGER, nullable=True, optional=True),
            "total": ScalarField(type=ScalarKind.INTEGER),
            "items": ScalarField(type=ScalarKind.INTEGER),
        }

    def _cursor(definition: TypeDefinition) -> None:
        definition.fields = {
            "next": ScalarField(type=ScalarKind.STRING, nullable=True, optional=True),
            "prev": ScalarField(type=ScalarKind.STRING, nullable=True, optional=True),
        }

    registry.register(registry.global_scope, OFFSET_PAGINATION, TypeKind.OBJECT, _offset)
    registry.register(registry.global_scope, CURSOR_PAGINATION, TypeKind.OBJECT, _cursor)


def register_error_types(registry: TypeRegistry) -> TypeDefinition:
    """Register the ``layer`` enum, ``issue`` and ``error_response_body``."""
    registry.register_enum(registry.global_scope, LAYER, ["http", "contract", "domain"])

    def _issue(definition: TypeDefinition) -> None:
        definition.fields = {
            "code": ScalarField(type=ScalarKind.STRING),
            "detail": ScalarField(type=ScalarKind.STRING),
            "path": ArrayField(of=ScalarField(type=ScalarKind.STRING)),
            "pointer": ScalarField(type=ScalarKind.STRING),
            "meta": ObjectField(),
        }

    def _body(definition: TypeDefinition) -> None:
        definition.fields = {
            "layer": ReferenceField(to=LAYER),
            "issues": ArrayField(of=ReferenceField(to=ISSUE)),
        }

    registry.register(registry.global_scope, ISSUE, TypeKind.OBJECT, _issue)
    return registry.register(registry.global_scope, ERROR_RESPONSE_BODY, TypeKind.OBJECT, _body)


def one_or_many(name: str, optional: bool = True) -> UnionField:
    """Return a union accepting a single *name* or an array of them."""
    return UnionField(
        optional=optional,
        variants=[
            UnionVariant(type=ReferenceField(to=name)),
            UnionVariant(type=ArrayField(of=ReferenceField(to=name))),
        ],
    )


# ################
# Implementation
# ################


@dataclass(frozen=True)
class _FilterSpec:
    kind: ScalarKind
    operators: tuple[str, ...]
    in_list: bool = True
    between: bool = False


_COMPARISON = ("eq", "gt", "gte", "lt", "lte")

_FILTER_DEFINITIONS: dict[str, _FilterSpec] = {
    "string_filter": _FilterSpec(ScalarKind.STRING, ("eq", "contains", "starts_with", "ends_with")),
    "integer_filter": _FilterSpec(ScalarKind.INTEGER, _COMPARISON, between=True),
    "decimal_filter": _FilterSpec(ScalarKind.DECIMAL, _COMPARISON, between=True),
    "number_filter": _FilterSpec(ScalarKind.NUMBER, _COMPARISON, between=True),
    "date_filter": _FilterSpec(ScalarKind.DATE, _COMPARISON, between=True),
    "datetime_filter": _FilterSpec(ScalarKind.DATETIME, _COMPARISON, between=True),
    "uuid_filter": _FilterSpec(ScalarKind.UUID, ("eq",)),
    "boolean_filter": _FilterSpec(ScalarKind.BOOLEAN, ("eq",), in_list=False),
}

_FILTER_KIND_MAP: dict[ScalarKind, str] = {
    ScalarKind.STRING: "string_filter",
    ScalarKind.INTEGER: "integer_filter",
    ScalarKind.DECIMAL: "decimal_filter",
    ScalarKind.NUMBER: "number_filter",
    ScalarKind.DATE: "date_filter",
    ScalarKind.DATETIME: "datetime_filter",
    ScalarKind.TIME: "string_filter",
    ScalarKind.UUID: "uuid_filter",
    ScalarKind.BOOLEAN: "boolean_filter",
}


def _range_builder(kind: ScalarKind):
    def _build(definition: TypeDefinition) -> None:
        definition.fields = {
            "from": ScalarField(type=kind, optional=True),
            "to": ScalarField(type=kind, optional=True),
        }

    return _build
