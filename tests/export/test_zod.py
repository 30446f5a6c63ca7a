# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Zod exporter."""

import pytest

from typegraph.export.ordering import EmissionEntry
from typegraph.export.zod import HEADER, field_expression, render_zod, schema_name
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import (
    ArrayField,
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
# Field Expressions
# ###############


def test_schema_name() -> None:
    assert schema_name("post_create_payload") == "PostCreatePayloadSchema"
    assert schema_name("sort_direction") == "SortDirectionSchema"


@pytest.mark.parametrize(
    "spec, expected",
    [
        (ScalarField(type=ScalarKind.STRING), "z.string()"),
        (ScalarField(type=ScalarKind.INTEGER, min=1), "z.number().int().min(1)"),
        (ScalarField(type=ScalarKind.STRING, max=200), "z.string().max(200)"),
        (ScalarField(type=ScalarKind.STRING, format="email"), "z.email()"),
        (ScalarField(type=ScalarKind.DATETIME), "z.iso.datetime()"),
        (ScalarField(type=ScalarKind.STRING, enum="post_status"), "PostStatusSchema"),
        (ReferenceField(to="user", nullable=True, optional=True), "UserSchema.nullable().optional()"),
        (ArrayField(of=ReferenceField(to="tag")), "z.array(TagSchema)"),
        (ArrayField(), "z.array(z.unknown())"),
        (ObjectField(), "z.object({})"),
        (LiteralField(value="car"), "z.literal('car')"),
        (LiteralField(value=True), "z.literal(true)"),
        (LiteralField(value=None), "z.null()"),
    ],
)
def test_field_expression(spec, expected) -> None:
    assert field_expression(spec) == expected


def test_inline_object_and_unions() -> None:
    page = ObjectField(shape={"number": ScalarField(type=ScalarKind.INTEGER, optional=True)})
    plain = UnionField(
        variants=[UnionVariant(type=ScalarField(type=ScalarKind.BOOLEAN)), UnionVariant(type=ReferenceField(to="x"))]
    )
    tagged = UnionField(discriminator="_type", variants=[UnionVariant(tag="create", type=ReferenceField(to="a"))])

    assert field_expression(page) == "z.object({ number: z.number().int().optional() })"
    assert field_expression(plain) == "z.union([z.boolean(), XSchema])"
    assert field_expression(tagged) == "z.discriminatedUnion('_type', [ASchema])"


def test_non_identifier_keys_are_quoted() -> None:
    spec = ObjectField(shape={"content-type": ScalarField(type=ScalarKind.STRING)})
    assert field_expression(spec) == "z.object({ 'content-type': z.string() })"


# ###############
# Modules
# ###############


def test_render_module() -> None:
    category = TypeDefinition(
        name="category",
        kind=TypeKind.OBJECT,
        fields={
            "name": ScalarField(type=ScalarKind.STRING),
            "parent": ReferenceField(to="category", optional=True),
        },
    )
    status = TypeDefinition(name="status", kind=TypeKind.ENUM, values=["draft", "it's"])
    source = render_zod([EmissionEntry("category", category, lazy=True)], {"status": status})

    assert source == (
        f"{HEADER}\n"
        "\n"
        "export const StatusSchema = z.enum(['draft', 'it\\'s']);\n"
        "\n"
        "export const CategorySchema: z.ZodType<any> = z.lazy(() => z.object({\n"
        "  name: z.string(),\n"
        "  parent: CategorySchema.optional(),\n"
        "}));\n"
    )


def test_render_eager_union_declaration() -> None:
    vehicle = TypeDefinition(
        name="vehicle",
        kind=TypeKind.UNION,
        discriminator="kind",
        variants=[UnionVariant(tag="car", type=ReferenceField(to="vehicle_car"))],
    )
    source = render_zod([EmissionEntry("vehicle", vehicle)], {})
    assert source.splitlines()[-1] == "export const VehicleSchema = z.discriminatedUnion('kind', [VehicleCarSchema]);"


def test_render_empty_module() -> None:
    assert render_zod([], {}) == HEADER + "\n"
