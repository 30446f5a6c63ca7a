# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON Schema (draft 2020-12) export of an ordered type surface.

Every named type and enum becomes an entry of ``$defs``; references between
them use ``$ref``. Discriminated unions additionally carry the OpenAPI
``discriminator`` keyword, which JSON Schema validators ignore.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

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

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def to_json_schema(
    entries: list[EmissionEntry],
    enums: Mapping[str, TypeDefinition],
    title: str | None = None,
) -> dict[str, Any]:
    """Build a JSON Schema document with one ``$defs`` entry per type and enum."""
    definitions: dict[str, Any] = {}
    for name, enum in enums.items():
        definitions[name] = _definition_schema(enum)
    for entry in entries:
        definitions[entry.name] = _definition_schema(entry.definition)

    document: dict[str, Any] = {"$schema": SCHEMA_DIALECT}
    if title:
        document["title"] = title
    document["$defs"] = definitions
    return document


def render_json_schema(
    entries: list[EmissionEntry],
    enums: Mapping[str, TypeDefinition],
    title: str | None = None,
) -> str:
    """Render :func:`to_json_schema` as indented JSON text."""
    return json.dumps(to_json_schema(entries, enums, title), indent=2) + "\n"


def field_schema(spec: FieldSpec) -> dict[str, Any]:
    """Return the JSON Schema of a single field specification."""
    if isinstance(spec, ScalarField):
        schema = _ref(spec.enum) if spec.enum is not None else _scalar_schema(spec)
    elif isinstance(spec, ReferenceField):
        schema = _ref(spec.to)
    elif isinstance(spec, ArrayField):
        if spec.of is not None:
            items = field_schema(spec.of)
        elif spec.shape:
            items = _object_schema(spec.shape)
        else:
            items = {}
        schema = {"type": "array", "items": items}
    elif isinstance(spec, ObjectField):
        schema = _object_schema(spec.shape)
    elif isinstance(spec, UnionField):
        schema = _union_schema(spec.discriminator, spec.variants)
    elif isinstance(spec, LiteralField):
        schema = {"const": spec.value}
    else:
        raise TypeError(f"Unsupported field specification: {spec!r}")

    if spec.nullable:
        schema = {"anyOf": [schema, {"type": "null"}]}
    if spec.description:
        schema["description"] = spec.description
    if spec.example is not None:
        schema["examples"] = [spec.example]
    if spec.deprecated:
        schema["deprecated"] = True
    return schema


# ################
# Implementation
# ################

_SCALAR_SCHEMAS: dict[ScalarKind, dict[str, Any]] = {
    ScalarKind.STRING: {"type": "string"},
    ScalarKind.INTEGER: {"type": "integer"},
    ScalarKind.NUMBER: {"type": "number"},
    ScalarKind.DECIMAL: {"type": "number"},
    ScalarKind.BOOLEAN: {"type": "boolean"},
    ScalarKind.DATE: {"type": "string", "format": "date"},
    ScalarKind.DATETIME: {"type": "string", "format": "date-time"},
    ScalarKind.TIME: {"type": "string", "format": "time"},
    ScalarKind.UUID: {"type": "string", "format": "uuid"},
    ScalarKind.OBJECT: {"type": "object"},
    ScalarKind.ARRAY: {"type": "array"},
    ScalarKind.UNKNOWN: {},
}

_NUMERIC = {ScalarKind.INTEGER, ScalarKind.NUMBER, ScalarKind.DECIMAL}


def _ref(name: str) -> dict[str, Any]:
    return {"$ref": f"#/$defs/{name}"}


def _scalar_schema(spec: ScalarField) -> dict[str, Any]:
    schema = dict(_SCALAR_SCHEMAS[spec.type])
    if spec.format:
        schema["format"] = spec.format
    if spec.type in _NUMERIC:
        bounds = ("minimum", "maximum")
    elif spec.type is ScalarKind.STRING:
        bounds = ("minLength", "maxLength")
    else:
        bounds = None
    if bounds is not None:
        if spec.min is not None:
            schema[bounds[0]] = _number(spec.min)
        if spec.max is not None:
            schema[bounds[1]] = _number(spec.max)
    return schema


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def _object_schema(shape: Mapping[str, FieldSpec]) -> dict[str, Any]:
    if not shape:
        return {"type": "object"}
    properties = {name: field_schema(spec) for name, spec in shape.items()}
    required = [name for name, spec in shape.items() if not spec.optional]
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    schema["additionalProperties"] = False
    return schema


def _union_schema(discriminator: str | None, variants: list[UnionVariant]) -> dict[str, Any]:
    members = [field_schema(variant.type) for variant in variants]
    if discriminator is None:
        return {"anyOf": members}
    return {"oneOf": members, "discriminator": {"propertyName": discriminator}}


def _definition_schema(definition: TypeDefinition) -> dict[str, Any]:
    if definition.kind is TypeKind.OBJECT:
        schema = _object_schema(definition.fields)
    elif definition.kind is TypeKind.UNION:
        schema = _union_schema(definition.discriminator, definition.variants)
    elif definition.kind is TypeKind.ENUM:
        schema = {"type": "string", "enum": list(definition.values)}
    else:
        schema = dict(_SCALAR_SCHEMAS[definition.target or ScalarKind.UNKNOWN])
    if definition.description:
        schema["description"] = definition.description
    return schema
