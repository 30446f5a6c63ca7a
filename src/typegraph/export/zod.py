# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Zod validator source export of an ordered type surface."""

from __future__ import annotations

import re
from collections.abc import Mapping

from typegraph.export.ordering import EmissionEntry
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import (
    ArrayField,
    FieldSpec,
    LiteralField,
    ObjectField,
    ReferenceField,
    ScalarField,
    TypeDefinition,
    TypeKind,
    UnionField,
    UnionVariant,
)

# ###############
# Public Interface
# ###############

HEADER = "import { z } from 'zod';"


def schema_name(name: str) -> str:
    """Return the exported constant name for the type *name*.

    >>> schema_name("post_create_payload")
    'PostCreatePayloadSchema'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part) + "Schema"


def render_zod(entries: list[EmissionEntry], enums: Mapping[str, TypeDefinition]) -> str:
    """Render enums followed by *entries* as a Zod module.

    Entries flagged lazy are wrapped in ``z.lazy`` so that they may refer to
    schemas declared later in the module.
    """
    blocks = [HEADER]
    for name, enum in enums.items():
        values = ", ".join(_quote(value) for value in enum.values)
        blocks.append(f"export const {schema_name(name)} = z.enum([{values}]);")
    for entry in entries:
        blocks.append(_declaration(entry))
    return "\n\n".join(blocks) + "\n"


def field_expression(spec: FieldSpec) -> str:
    """Return the Zod expression of a single field specification."""
    if isinstance(spec, ScalarField):
        expression = schema_name(spec.enum) if spec.enum is not None else _scalar_expression(spec)
    elif isinstance(spec, ReferenceField):
        expression = schema_name(spec.to)
    elif isinstance(spec, ArrayField):
        if spec.of is not None:
            items = field_expression(spec.of)
        elif spec.shape:
            items = _object_expression(spec.shape)
        else:
            items = "z.unknown()"
        expression = f"z.array({items})"
    elif isinstance(spec, ObjectField):
        expression = _object_expression(spec.shape)
    elif isinstance(spec, UnionField):
        expression = _union_expression(spec.discriminator, spec.variants)
    elif isinstance(spec, LiteralField):
        expression = _literal_expression(spec.value)
    else:
        raise TypeError(f"Unsupported field specification: {spec!r}")

    if spec.nullable:
        expression += ".nullable()"
    if spec.optional:
        expression += ".optional()"
    return expression


# ################
# Implementation
# ################

_SCALARS: dict[ScalarKind, str] = {
    ScalarKind.STRING: "z.string()",
    ScalarKind.INTEGER: "z.number().int()",
    ScalarKind.NUMBER: "z.number()",
    ScalarKind.DECIMAL: "z.number()",
    ScalarKind.BOOLEAN: "z.boolean()",
    ScalarKind.DATE: "z.iso.date()",
    ScalarKind.DATETIME: "z.iso.datetime()",
    ScalarKind.TIME: "z.iso.time()",
    ScalarKind.UUID: "z.uuid()",
    ScalarKind.OBJECT: "z.record(z.string(), z.unknown())",
    ScalarKind.ARRAY: "z.array(z.unknown())",
    ScalarKind.UNKNOWN: "z.unknown()",
}

_FORMATS = {
    "email": "z.email()",
    "url": "z.url()",
    "uuid": "z.uuid()",
    "ipv4": "z.ipv4()",
    "ipv6": "z.ipv6()",
    "date": "z.iso.date()",
    "datetime": "z.iso.datetime()",
}

_BOUNDED = {ScalarKind.STRING, ScalarKind.INTEGER, ScalarKind.NUMBER, ScalarKind.DECIMAL}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _quote(value: str) -> str:
    return "'" + str(value).replace("\\", "\\\\").replace("'", "\\'") + "'"


def _key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else _quote(name)


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(value)


def _scalar_expression(spec: ScalarField) -> str:
    if spec.format and spec.type is ScalarKind.STRING:
        expression = _FORMATS.get(spec.format, "z.string()")
    else:
        expression = _SCALARS[spec.type]
    if spec.type in _BOUNDED:
        if spec.min is not None:
            expression += f".min({_number(spec.min)})"
        if spec.max is not None:
            expression += f".max({_number(spec.max)})"
    return expression


def _literal_expression(value: str | int | float | bool | None) -> str:
    if value is None:
        return "z.null()"
    if isinstance(value, bool):
        return f"z.literal({'true' if value else 'false'})"
    if isinstance(value, (int, float)):
        return f"z.literal({value})"
    return f"z.literal({_quote(value)})"


def _object_expression(shape: Mapping[str, FieldSpec], multiline: bool = False) -> str:
    if not shape:
        return "z.object({})"
    if multiline:
        lines = [f"  {_key(name)}: {field_expression(spec)}," for name, spec in shape.items()]
        return "z.object({\n" + "\n".join(lines) + "\n})"
    properties = ", ".join(f"{_key(name)}: {field_expression(spec)}" for name, spec in shape.items())
    return f"z.object({{ {properties} }})"


def _union_expression(discriminator: str | None, variants: list[UnionVariant]) -> str:
    members = ", ".join(field_expression(variant.type) for variant in variants)
    if discriminator is not None:
        return f"z.discriminatedUnion({_quote(discriminator)}, [{members}])"
    return f"z.union([{members}])"


def _declaration(entry: EmissionEntry) -> str:
    definition = entry.definition
    if definition.kind is TypeKind.OBJECT:
        body = _object_expression(definition.fields, multiline=True)
    elif definition.kind is TypeKind.UNION:
        body = _union_expression(definition.discriminator, definition.variants)
    elif definition.kind is TypeKind.ENUM:
        body = f"z.enum([{', '.join(_quote(value) for value in definition.values)}])"
    else:
        body = _SCALARS[definition.target or ScalarKind.UNKNOWN]

    name = schema_name(entry.name)
    if entry.lazy:
        return f"export const {name}: z.ZodType<any> = z.lazy(() => {body});"
    return f"export const {name} = {body};"
