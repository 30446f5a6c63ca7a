# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resource descriptors and the resource catalog."""

import pytest
from pydantic import ValidationError

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

# ###############
# Attributes
# ###############


def test_attribute_defaults() -> None:
    """A bare attribute is a required, non-nullable, read-only string."""
    attr = AttributeDescriptor(name="title")
    assert attr.type is ScalarKind.STRING
    assert not attr.nullable
    assert not attr.optional
    assert not attr.is_writable
    assert attr.enum is None


def test_attribute_writable_for() -> None:
    attr = AttributeDescriptor(name="title", writable=["create"])
    assert attr.is_writable
    assert attr.writable_for("create")
    assert not attr.writable_for("update")


def test_attribute_rejects_unknown_writable_action() -> None:
    with pytest.raises(ValidationError):
        AttributeDescriptor(name="title", writable=["destroy"])


def test_attribute_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        AttributeDescriptor(name="title", filterabel=True)


def test_attribute_is_immutable() -> None:
    attr = AttributeDescriptor(name="title")
    with pytest.raises(ValidationError):
        attr.name = "other"


def test_attribute_enum_is_ordered_tuple() -> None:
    attr = AttributeDescriptor(name="status", enum=["draft", "sent", "paid"])
    assert attr.enum == ("draft", "sent", "paid")


# ###############
# Associations
# ###############


def test_association_defaults() -> None:
    assoc = AssociationDescriptor(name="author", target="user")
    assert assoc.cardinality is Cardinality.SINGULAR
    assert assoc.include is IncludeMode.OPTIONAL
    assert not assoc.is_collection
    assert not assoc.always_included
    assert not assoc.is_polymorphic
    assert assoc.discriminator is None


def test_polymorphic_association_defaults_discriminator() -> None:
    """Polymorphic associations discriminate on '{name}_type' unless told otherwise."""
    assoc = AssociationDescriptor(name="commentable", polymorphic={"post": "post", "video": "video"})
    assert assoc.is_polymorphic
    assert assoc.discriminator == "commentable_type"


def test_polymorphic_association_keeps_explicit_discriminator() -> None:
    assoc = AssociationDescriptor(name="commentable", polymorphic={"post": "post"}, discriminator="kind")
    assert assoc.discriminator == "kind"


def test_association_flags() -> None:
    assoc = AssociationDescriptor(
        name="comments",
        cardinality="collection",
        include="always",
        writable=["create", "update"],
    )
    assert assoc.is_collection
    assert assoc.always_included
    assert assoc.writable_for("update")


# ###############
# Resources
# ###############


def test_resource_root_key_defaults_to_plural_of_name() -> None:
    assert ResourceDescriptor(name="post").root_key == "posts"
    assert ResourceDescriptor(name="person", plural="people").root_key == "people"


def test_resource_sti_flags() -> None:
    base = ResourceDescriptor(
        name="vehicle",
        inheritance=Inheritance(discriminator="kind", variants={"car": "car"}),
    )
    assert base.is_sti_base
    assert not base.is_variant
    assert not ResourceDescriptor(name="car").is_sti_base


# ###############
# Catalog
# ###############


def _catalog() -> ResourceCatalog:
    return ResourceCatalog(
        [
            ResourceDescriptor(
                name="vehicle",
                attributes={"wheels": AttributeDescriptor(name="wheels", type="integer")},
                associations={"owner": AssociationDescriptor(name="owner", target="user")},
                inheritance=Inheritance(discriminator="kind", variants={"car": "car", "boat": "ship"}),
            ),
            ResourceDescriptor(
                name="car",
                attributes={
                    "doors": AttributeDescriptor(name="doors", type="integer"),
                    "wheels": AttributeDescriptor(name="wheels", type="integer", nullable=True),
                },
            ),
            ResourceDescriptor(name="user"),
        ]
    )


def test_catalog_lookup() -> None:
    catalog = _catalog()
    assert len(catalog) == 3
    assert "user" in catalog
    assert "ghost" not in catalog
    assert catalog.get("user").name == "user"
    assert [r.name for r in catalog] == ["vehicle", "car", "user"]


def test_catalog_resolve_single_target() -> None:
    catalog = _catalog()
    assert catalog.resolve(AssociationDescriptor(name="owner", target="user")).name == "user"


def test_catalog_resolve_unknown_target_is_none() -> None:
    catalog = _catalog()
    assert catalog.resolve(AssociationDescriptor(name="owner", target="ghost")) is None
    assert catalog.resolve(AssociationDescriptor(name="owner")) is None


def test_catalog_resolve_polymorphic_skips_unknown_targets() -> None:
    catalog = _catalog()
    assoc = AssociationDescriptor(name="subject", polymorphic={"car": "car", "ghost": "ghost"})
    assert catalog.resolve(assoc) is None
    assert list(catalog.resolve_polymorphic(assoc)) == ["car"]


def test_catalog_variants_merge_base_members() -> None:
    """Variants list base members first and override them on name clashes."""
    catalog = _catalog()
    variants = catalog.variants(catalog.get("vehicle"))

    assert [tag for tag, _ in variants] == ["car", "boat"]
    tag, car = variants[0]
    assert car.name == "car"
    assert car.is_variant
    assert car.variant_tag == "car"
    assert car.variant_discriminator == "kind"
    assert list(car.attributes) == ["wheels", "doors"]
    assert car.attributes["wheels"].nullable
    assert list(car.associations) == ["owner"]


def test_catalog_variants_unresolved_is_none() -> None:
    catalog = _catalog()
    assert catalog.variants(catalog.get("vehicle"))[1] == ("boat", None)


def test_catalog_variants_of_plain_resource_is_empty() -> None:
    catalog = _catalog()
    assert catalog.variants(catalog.get("user")) == []
