# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor, type and action models for typegraph."""

from typegraph.model.actions import Action, ActionRequest, ActionResponse
from typegraph.model.descriptors import (
    AssociationDescriptor,
    AttributeDescriptor,
    Cardinality,
    IncludeMode,
    Inheritance,
    ResourceCatalog,
    ResourceDescriptor,
    ScalarKind,
)
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
    iter_field_specs,
)

__all__ = [
    # Descriptors
    "ScalarKind",
    "Cardinality",
    "IncludeMode",
    "AttributeDescriptor",
    "AssociationDescriptor",
    "Inheritance",
    "ResourceDescriptor",
    "ResourceCatalog",
    # Type system
    "ScalarField",
    "ReferenceField",
    "ArrayField",
    "ObjectField",
    "UnionField",
    "UnionVariant",
    "LiteralField",
    "FieldSpec",
    "TypeKind",
    "TypeDefinition",
    "iter_field_specs",
    # Actions
    "Action",
    "ActionRequest",
    "ActionResponse",
]
