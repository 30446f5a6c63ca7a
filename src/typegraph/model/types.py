# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field specifications and type definitions produced by the compiler."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from typegraph.model.descriptors import ScalarKind

# ###############
# Public Interface
# ###############


class _FieldBase(BaseModel):
    """Flags shared by every field specification."""

    optional: bool = False
    nullable: bool = False
    description: str | None = None
    example: Any = None
    deprecated: bool = False


class ScalarField(_FieldBase):
    """A scalar value, optionally constrained to a named enum."""

    kind: Literal["scalar"] = "scalar"
    type: ScalarKind
    enum: str | None = None
    format: str | None = None
    min: float | None = None
    max: float | None = None


class ReferenceField(_FieldBase):
    """A reference to a named type or enum by qualified name."""

    kind: Literal["reference"] = "reference"
    to: str


class ArrayField(_FieldBase):
    """An array whose elements are described by ``of`` or an inline ``shape``."""

    kind: Literal["array"] = "array"
    of: FieldSpec | None = None
    shape: dict[str, FieldSpec] = _Field(default_factory=dict)


class ObjectField(_FieldBase):
    """An inline (anonymous) object."""

    kind: Literal["object"] = "object"
    shape: dict[str, FieldSpec] = _Field(default_factory=dict)


class UnionVariant(BaseModel):
    """One member of a union, tagged when the union is discriminated."""

    tag: str | None = None
    type: FieldSpec


class UnionField(_FieldBase):
    """An inline union, discriminated when ``discriminator`` is set."""

    kind: Literal["union"] = "union"
    discriminator: str | None = None
    variants: list[UnionVariant] = _Field(default_factory=list)


class LiteralField(_FieldBase):
    """A fixed literal value."""

    kind: Literal["literal"] = "literal"
    value: str | int | float | bool | None


# The `kind` discriminator keeps validation of nested specs unambiguous.
FieldSpec = Annotated[
    ScalarField | ReferenceField | ArrayField | ObjectField | UnionField | LiteralField,
    _Field(discriminator="kind"),
]


class TypeKind(Enum):
    """Kinds of named type definitions."""

    OBJECT = "object"
    UNION = "union"
    ENUM = "enum"
    BUILTIN = "builtin"


class TypeDefinition(BaseModel):
    """A named type registered in a scope.

    Only the attributes matching ``kind`` are meaningful: ``fields`` for
    objects, ``discriminator``/``variants`` for unions, ``values`` for enums
    and ``target`` for builtin references.
    """

    name: str
    kind: TypeKind
    fields: dict[str, FieldSpec] = _Field(default_factory=dict)
    discriminator: str | None = None
    variants: list[UnionVariant] = _Field(default_factory=list)
    values: list[str] = _Field(default_factory=list)
    target: ScalarKind | None = None
    description: str | None = None

    def field_specs(self) -> list[FieldSpec]:
        """Return the top-level field specs of this definition in order."""
        if self.kind is TypeKind.OBJECT:
            return list(self.fields.values())
        if self.kind is TypeKind.UNION:
            return [variant.type for variant in self.variants]
        return []


def iter_field_specs(spec: FieldSpec):
    """Yield *spec* and every field spec nested inside it, depth first."""
    yield spec
    if isinstance(spec, ArrayField):
        if spec.of is not None:
            yield from iter_field_specs(spec.of)
        for nested in spec.shape.values():
            yield from iter_field_specs(nested)
    elif isinstance(spec, ObjectField):
        for nested in spec.shape.values():
            yield from iter_field_specs(nested)
    elif isinstance(spec, UnionField):
        for variant in spec.variants:
            yield from iter_field_specs(variant.type)


# Resolve forward references for the recursive field models.
ArrayField.model_rebuild()
ObjectField.model_rebuild()
UnionVariant.model_rebuild()
UnionField.model_rebuild()
TypeDefinition.model_rebuild()
