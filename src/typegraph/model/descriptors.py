# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resource descriptors: the read-only input of the type-graph compiler."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

WritableAction = Literal["create", "update"]


class ScalarKind(Enum):
    """Scalar kinds an attribute can carry."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    UUID = "uuid"
    OBJECT = "object"
    ARRAY = "array"
    UNKNOWN = "unknown"


class Cardinality(Enum):
    """Whether an association points at one record or many."""

    SINGULAR = "singular"
    COLLECTION = "collection"


class IncludeMode(Enum):
    """How an association participates in the include tree."""

    OPTIONAL = "optional"
    ALWAYS = "always"


class AttributeDescriptor(BaseModel):
    """A single attribute of a resource."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: ScalarKind = ScalarKind.STRING
    nullable: bool = False
    optional: bool = False
    enum: tuple[str, ...] | None = None
    filterable: bool = False
    sortable: bool = False
    writable: frozenset[WritableAction] = frozenset()
    format: str | None = None
    min: float | None = None
    max: float | None = None
    description: str | None = None
    example: Any = None
    deprecated: bool = False

    @property
    def is_writable(self) -> bool:
        return bool(self.writable)

    def writable_for(self, action: str) -> bool:
        return action in self.writable


class AssociationDescriptor(BaseModel):
    """A link from one resource to another (or to a tagged set of others).

    Exactly one of ``target`` and ``polymorphic`` is normally set. When
    neither is set the association is unresolved and builders fall back to
    an untyped placeholder.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    cardinality: Cardinality = Cardinality.SINGULAR
    nullable: bool = False
    filterable: bool = False
    sortable: bool = False
    writable: frozenset[WritableAction] = frozenset()
    include: IncludeMode = IncludeMode.OPTIONAL
    allow_destroy: bool = False
    target: str | None = None
    polymorphic: dict[str, str] = _Field(default_factory=dict)
    discriminator: str | None = None
    description: str | None = None
    example: Any = None
    deprecated: bool = False

    @model_validator(mode="before")
    @classmethod
    def _default_discriminator(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("polymorphic") and data.get("discriminator") is None:
            data = {**data, "discriminator": f"{data.get('name')}_type"}
        return data

    @property
    def is_polymorphic(self) -> bool:
        return bool(self.polymorphic)

    @property
    def is_collection(self) -> bool:
        return self.cardinality is Cardinality.COLLECTION

    @property
    def always_included(self) -> bool:
        return self.include is IncludeMode.ALWAYS

    @property
    def is_writable(self) -> bool:
        return bool(self.writable)

    def writable_for(self, action: str) -> bool:
        return action in self.writable


class Inheritance(BaseModel):
    """Single-table inheritance metadata of a base resource."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    discriminator: str | None = None
    variants: dict[str, str] = _Field(default_factory=dict)


class ResourceDescriptor(BaseModel):
    """Structural description of one API resource."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    plural: str | None = None
    attributes: dict[str, AttributeDescriptor] = _Field(default_factory=dict)
    associations: dict[str, AssociationDescriptor] = _Field(default_factory=dict)
    inheritance: Inheritance | None = None
    contract: bool = True
    description: str | None = None
    # Set on merged STI variants produced by ResourceCatalog.variants().
    variant_tag: str | None = None
    variant_discriminator: str | None = None

    @property
    def root_key(self) -> str:
        """Plural key used for collection responses."""
        return self.plural or f"{self.name}s"

    @property
    def is_sti_base(self) -> bool:
        return self.inheritance is not None and bool(self.inheritance.variants)

    @property
    def is_variant(self) -> bool:
        return self.variant_tag is not None


class ResourceCatalog:
    """Explicit resolver from association targets to resource descriptors.

    Replaces naming-convention lookups: an association whose target name is
    not in the catalog is simply unresolved.
    """

    def __init__(self, resources: list[ResourceDescriptor] | None = None) -> None:
        self._resources: dict[str, ResourceDescriptor] = {}
        for resource in resources or []:
            self.add(resource)

    def add(self, resource: ResourceDescriptor) -> None:
        self._resources[resource.name] = resource

    def get(self, name: str) -> ResourceDescriptor | None:
        return self._resources.get(name)

    def __iter__(self):
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def resolve(self, association: AssociationDescriptor) -> ResourceDescriptor | None:
        """Return the single target of *association*, or None.

        Polymorphic associations never resolve to a single target.
        """
        if association.is_polymorphic or association.target is None:
            return None
        return self._resources.get(association.target)

    def resolve_polymorphic(self, association: AssociationDescriptor) -> dict[str, ResourceDescriptor]:
        """Return the resolvable ``tag -> descriptor`` pairs of a polymorphic association."""
        resolved: dict[str, ResourceDescriptor] = {}
        for tag, name in association.polymorphic.items():
            resource = self._resources.get(name)
            if resource is not None:
                resolved[tag] = resource
        return resolved

    def variants(self, resource: ResourceDescriptor) -> list[tuple[str, ResourceDescriptor | None]]:
        """Return the STI variants of *resource*, each merged with its base.

        The merged variant lists the base's attributes and associations first,
        followed by the variant's own (which win on name clashes). Variants
        whose resource name is unknown are returned as ``(tag, None)``.
        """
        if resource.inheritance is None:
            return []
        result: list[tuple[str, ResourceDescriptor | None]] = []
        for tag, name in resource.inheritance.variants.items():
            variant = self._resources.get(name)
            if variant is None:
                result.append((tag, None))
                continue
            merged = variant.model_copy(
                update={
                    "attributes": {**resource.attributes, **variant.attributes},
                    "associations": {**resource.associations, **variant.associations},
                    "variant_tag": tag,
                    "variant_discriminator": resource.inheritance.discriminator,
                }
            )
            result.append((tag, merged))
        return result
