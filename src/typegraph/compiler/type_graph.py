# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type graph compiler: resource descriptors to registered type definitions.

Each resource that owns a contract is compiled into its own scope. Builders
walk associations recursively; termination on cyclic resource graphs comes
from two independent bounds:

* a per-branch visited-set of resource names, extended by copy at every
  recursive step so that sibling branches never prune each other, and
* the constant ``MAX_RECURSION_DEPTH`` budget.

Reaching either bound is not an error: filter and sort builders return None
and the association field is omitted, include builders degrade the field to
a plain boolean. Only declaration mistakes raise.

Associations whose target owns a contract of its own are not expanded
inline. The target scope is imported under the target's name and the needed
type is built there (once, through the registry), so every scope that links
to a resource shares one compiled definition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from typegraph.compiler import builtin_types
from typegraph.errors import InvalidAssociationError, InvalidInheritanceError
from typegraph.model.descriptors import (
    AssociationDescriptor,
    AttributeDescriptor,
    ResourceCatalog,
    ResourceDescriptor,
    ScalarKind,
)
from typegraph.model.types import (
    ArrayField,
    LiteralField,
    ReferenceField,
    ScalarField,
    TypeDefinition,
    TypeKind,
    UnionField,
    UnionVariant,
)
from typegraph.registry.scope import Scope, qualify
from typegraph.registry.store import TypeRegistry

# ###############
# Public Interface
# ###############

MAX_RECURSION_DEPTH = 3

PAYLOAD_ACTIONS = ("create", "update")
NESTED_TYPE_FIELD = "_type"
NESTED_DESTROY_FIELD = "_destroy"
ENUM_SUFFIX = "_enum"

Visited = frozenset[str]
RecursiveBuilder = Callable[[Scope, ResourceDescriptor, Visited, int], str | None]


class TypeGraphCompiler:
    """Builds filter, sort, include, response and payload types into a registry.

    Every ``build_*`` method returns the qualified name of the (new or
    existing) type definition, or None when no type is produced.

    Args:
        registry: Registry the compiled definitions are written to.
        catalog: Resolver for association targets and inheritance variants.
    """

    def __init__(self, registry: TypeRegistry, catalog: ResourceCatalog) -> None:
        self.registry = registry
        self.catalog = catalog

    # -- compilation units ---------------------------------------------------

    def compile(self, resource: ResourceDescriptor) -> Scope:
        """Compile every type of *resource* into its own scope."""
        self.registry.claim(_compile_key(resource))
        return self._compile(resource)

    # -- filter / sort / include --------------------------------------------

    def build_filter_type(
        self,
        scope: Scope,
        resource: ResourceDescriptor,
        visited: Visited = frozenset(),
        depth: int = 0,
    ) -> str | None:
        """Build the filter object of *resource*.

        The object carries ``_and``/``_or``/``_not`` combinators over itself,
        one field per filterable attribute and one per filterable association
        whose target yields a filter type.
        """
        if resource.name in visited or depth >= MAX_RECURSION_DEPTH:
            return None
        visited = visited | {resource.name}
        if not self._has_filterable_content(resource, visited):
            return None

        local_name = _depth_name("filter", resource, depth)

        def _build(definition: TypeDefinition) -> None:
            self_ref = definition.name
            fields: dict[str, Any] = {
                "_and": ArrayField(of=ReferenceField(to=self_ref), optional=True),
                "_or": ArrayField(of=ReferenceField(to=self_ref), optional=True),
                "_not": ReferenceField(to=self_ref, optional=True),
            }
            for attribute in resource.attributes.values():
                if attribute.filterable:
                    spec = self._attribute_filter_field(scope, resource, attribute)
                    if spec is not None:
                        fields[attribute.name] = spec
            for association in resource.associations.values():
                if not association.filterable:
                    continue
                _check_association(association)
                nested = self._nested_type(
                    self.build_filter_type, "filter", scope, association, visited, depth
                )
                if nested is not None:
                    fields[association.name] = ReferenceField(to=nested, optional=True)
            definition.fields = fields

        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    def build_sort_type(
        self,
        scope: Scope,
        resource: ResourceDescriptor,
        visited: Visited = frozenset(),
        depth: int = 0,
    ) -> str | None:
        """Build the sort object of *resource*: a direction per sortable attribute."""
        if resource.name in visited or depth >= MAX_RECURSION_DEPTH:
            return None
        visited = visited | {resource.name}
        if not self._has_sortable_content(resource, visited):
            return None

        direction = builtin_types.register_sort_direction(self.registry).name
        local_name = _depth_name("sort", resource, depth)

        def _build(definition: TypeDefinition) -> None:
            fields: dict[str, Any] = {}
            for attribute in resource.attributes.values():
                if attribute.sortable:
                    fields[attribute.name] = ReferenceField(to=direction, optional=True)
            for association in resource.associations.values():
                if not association.sortable:
                    continue
                _check_association(association)
                nested = self._nested_type(self.build_sort_type, "sort", scope, association, visited, depth)
                if nested is not None:
                    fields[association.name] = ReferenceField(to=nested, optional=True)
            definition.fields = fields

        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    def build_include_type(
        self,
        scope: Scope,
        resource: ResourceDescriptor,
        visited: Visited = frozenset(),
        depth: int = 0,
    ) -> str | None:
        """Build the include object of *resource*.

        Optional associations become ``boolean | nested include``; always
        included ones reference the nested include directly. A target that
        was already visited on this branch degrades to a plain boolean (or
        is omitted when always included). Past the depth budget no new
        include type is created, but an already registered one is still
        returned by name.
        """
        local_name = _depth_name("include", resource, depth)
        existing = scope.lookup(local_name)
        if existing is not None and existing.kind is TypeKind.OBJECT:
            return existing.name
        if resource.name in visited:
            return None
        visited = visited | {resource.name}
        if not self._has_includable(scope.name, resource, visited, depth):
            return None

        def _build(definition: TypeDefinition) -> None:
            fields: dict[str, Any] = {}
            for association in resource.associations.values():
                spec = self._include_field(scope, association, visited, depth)
                if spec is not None:
                    fields[association.name] = spec
            definition.fields = fields

        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    # -- responses -----------------------------------------------------------

    def build_association_type(
        self,
        scope: Scope,
        association: AssociationDescriptor,
        owner: ResourceDescriptor | None = None,
    ) -> str | None:
        """Return the response type an association points at.

        Polymorphic associations get a union discriminated by the
        association's discriminator, with one variant per resolvable target.
        Single targets reuse the target's response type. Unresolvable
        associations return None.
        """
        if not association.is_polymorphic:
            target = self.catalog.resolve(association)
            if target is None:
                _logger.debug("association %r has no resolvable target", association.name)
                return None
            return self._response_reference(scope, target)

        targets = self.catalog.resolve_polymorphic(association)
        if not targets:
            return None
        local_name = association.name if owner is None else _owned_name(scope, owner, association.name)

        def _build(definition: TypeDefinition) -> None:
            definition.discriminator = association.discriminator
            definition.variants = [
                UnionVariant(tag=tag, type=ReferenceField(to=self._response_reference(scope, target)))
                for tag, target in targets.items()
            ]

        return self.registry.register(scope, local_name, TypeKind.UNION, _build).name

    def build_sti_union(
        self,
        scope: Scope,
        resource: ResourceDescriptor,
        name: str,
        variant_builder: Callable[[ResourceDescriptor], str | None],
    ) -> str | None:
        """Build a union over the inheritance variants of *resource*.

        Variants for which *variant_builder* returns None are skipped.

        Raises:
            InvalidInheritanceError: If the inheritance has no discriminator
                or a variant does not resolve to a resource.
        """
        inheritance = resource.inheritance
        if inheritance is None or not inheritance.variants:
            return None
        if not inheritance.discriminator:
            raise InvalidInheritanceError(resource.name, "inheritance declares variants without a discriminator")

        def _build(definition: TypeDefinition) -> None:
            definition.discriminator = inheritance.discriminator
            for tag, variant in self.catalog.variants(resource):
                if variant is None:
                    raise InvalidInheritanceError(
                        resource.name, f"variant '{tag}' does not resolve to a known resource"
                    )
                type_name = variant_builder(variant)
                if type_name is not None:
                    definition.variants.append(UnionVariant(tag=tag, type=ReferenceField(to=type_name)))

        return self.registry.register(scope, name, TypeKind.UNION, _build).name

    def build_response_type(self, scope: Scope, resource: ResourceDescriptor) -> str:
        """Build the response object of *resource* (a union for STI bases)."""
        local_name = _owned_name(scope, resource, "")
        if resource.is_sti_base:
            return self.build_sti_union(
                scope,
                resource,
                local_name,
                lambda variant: self._build_response_object(scope, variant, _owned_name(scope, variant, "")),
            )
        return self._build_response_object(scope, resource, local_name)

    # -- payloads ------------------------------------------------------------

    def build_payload_type(self, scope: Scope, resource: ResourceDescriptor, action: str) -> str | None:
        """Build ``{action}_payload`` from the attributes writable for *action*.

        STI bases get a union of the per-variant ``{variant}_{action}_payload``
        objects instead.
        """
        local_name = _owned_name(scope, resource, f"{action}_payload")
        if resource.is_sti_base:
            variants = [variant for _, variant in self.catalog.variants(resource) if variant is not None]
            if variants and not any(_has_writable(variant, action) for variant in variants):
                return None
            return self.build_sti_union(
                scope,
                resource,
                local_name,
                lambda variant: self._build_payload_object(
                    scope, variant, _owned_name(scope, variant, f"{action}_payload"), action
                ),
            )
        return self._build_payload_object(scope, resource, local_name, action)

    def build_nested_payload_union(self, scope: Scope, resource: ResourceDescriptor) -> str | None:
        """Build the ``nested_payload`` union used by writable associations.

        The union joins ``nested_create_payload`` and ``nested_update_payload``,
        discriminated by a ``_type`` literal. The update variant accepts a
        ``_destroy`` flag when an association targeting *resource* allows it.
        """
        if not any(_has_writable(resource, action) for action in PAYLOAD_ACTIONS):
            return None

        allow_destroy = self._allows_destroy(resource)

        def _build(definition: TypeDefinition) -> None:
            definition.discriminator = NESTED_TYPE_FIELD
            for action in PAYLOAD_ACTIONS:
                variant_name = self._build_nested_variant(scope, resource, action, allow_destroy)
                definition.variants.append(UnionVariant(tag=action, type=ReferenceField(to=variant_name)))

        local_name = _owned_name(scope, resource, "nested_payload")
        return self.registry.register(scope, local_name, TypeKind.UNION, _build).name

    def _compile(self, resource: ResourceDescriptor) -> Scope:
        scope = self.registry.scope(resource.name)
        _logger.debug("compiling scope %r", scope.name)

        for association in resource.associations.values():
            _check_association(association)
        for attribute in resource.attributes.values():
            if attribute.enum:
                self._enum_reference(scope, resource, attribute)

        self.build_filter_type(scope, resource)
        self.build_sort_type(scope, resource)
        self.build_include_type(scope, resource)
        self.build_response_type(scope, resource)
        for action in PAYLOAD_ACTIONS:
            self.build_payload_type(scope, resource, action)
        if self._is_nested_writable(resource):
            self.build_nested_payload_union(scope, resource)
        return scope

    def _ensure_compiled(self, resource: ResourceDescriptor) -> None:
        if self.registry.claim(_compile_key(resource)):
            self._compile(resource)

    def _link(self, scope: Scope, target: ResourceDescriptor) -> str | None:
        """Import the scope of *target* into *scope* and return the alias.

        Returns None when *target* is compiled inline in *scope* instead.
        """
        if not target.contract or target.name == scope.name:
            return None
        target_scope = self.registry.scope(target.name)
        self.registry.import_scope(scope, target_scope, target.name)
        self._ensure_compiled(target)
        return target.name

    def _resolve_name(self, scope: Scope, name: str) -> str | None:
        definition = self.registry.resolve(scope, name)
        return definition.name if definition is not None else None

    def _nested_type(
        self,
        builder: RecursiveBuilder,
        kind: str,
        scope: Scope,
        association: AssociationDescriptor,
        visited: Visited,
        depth: int,
    ) -> str | None:
        """Build or import the *kind* type of an association target."""
        target = self.catalog.resolve(association)
        if target is None:
            return None
        alias = self._link(scope, target)
        if alias is None:
            return builder(scope, target, visited, depth + 1)
        if builder(self.registry.scope(target.name), target, frozenset(), 0) is None:
            return None
        return self._resolve_name(scope, qualify(alias, kind))

    def _response_reference(self, scope: Scope, target: ResourceDescriptor) -> str | None:
        alias = self._link(scope, target)
        if alias is None:
            return self.build_response_type(scope, target)
        self.build_response_type(self.registry.scope(target.name), target)
        return self._resolve_name(scope, alias)

    def _nested_payload_reference(self, scope: Scope, target: ResourceDescriptor) -> str | None:
        alias = self._link(scope, target)
        if alias is None:
            return self.build_nested_payload_union(scope, target)
        if self.build_nested_payload_union(self.registry.scope(target.name), target) is None:
            return None
        return self._resolve_name(scope, qualify(alias, "nested_payload"))

    def _enum_reference(self, scope: Scope, resource: ResourceDescriptor, attribute: AttributeDescriptor) -> str:
        """Register the enum of *attribute* as ``{attribute}_enum`` and return its qualified name."""
        local_name = _owned_name(scope, resource, f"{attribute.name}{ENUM_SUFFIX}")
        return self.registry.register_enum(scope, local_name, attribute.enum or ()).name

    def _attribute_filter_field(
        self, scope: Scope, resource: ResourceDescriptor, attribute: AttributeDescriptor
    ) -> UnionField | ReferenceField | None:
        if attribute.enum:
            enum_name = self._enum_reference(scope, resource, attribute)
            enum_filter = builtin_types.register_enum_filter(self.registry, enum_name)
            return ReferenceField(to=enum_filter.name, optional=True)

        filter_name = builtin_types.filter_type_for(attribute.type, attribute.nullable)
        if filter_name is None:
            return None
        builtin_types.register_filter_type(self.registry, filter_name)
        return UnionField(
            optional=True,
            variants=[
                UnionVariant(type=ScalarField(type=attribute.type)),
                UnionVariant(type=ReferenceField(to=filter_name)),
            ],
        )

    def _include_field(
        self,
        scope: Scope,
        association: AssociationDescriptor,
        visited: Visited,
        depth: int,
    ) -> UnionField | ReferenceField | ScalarField | None:
        boolean = None if association.always_included else ScalarField(type=ScalarKind.BOOLEAN, optional=True)
        if association.is_polymorphic:
            return boolean if self.catalog.resolve_polymorphic(association) else None

        target = self.catalog.resolve(association)
        if target is None:
            return None
        if target.name in visited:
            return boolean
        nested = self._nested_type(self.build_include_type, "include", scope, association, visited, depth)
        if nested is None:
            return boolean
        if association.always_included:
            return ReferenceField(to=nested)
        return UnionField(
            optional=True,
            variants=[
                UnionVariant(type=ScalarField(type=ScalarKind.BOOLEAN)),
                UnionVariant(type=ReferenceField(to=nested)),
            ],
        )

    def _build_response_object(self, scope: Scope, resource: ResourceDescriptor, local_name: str) -> str:
        def _build(definition: TypeDefinition) -> None:
            definition.description = resource.description
            fields: dict[str, Any] = {}
            if resource.variant_tag is not None:
                fields[resource.variant_discriminator] = LiteralField(value=resource.variant_tag)
            for attribute in resource.attributes.values():
                fields[attribute.name] = self._attribute_field(
                    scope, resource, attribute, optional=attribute.optional
                )
            for association in resource.associations.values():
                fields[association.name] = self._association_response_field(scope, resource, association)
            definition.fields = fields

        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    def _association_response_field(
        self, scope: Scope, owner: ResourceDescriptor, association: AssociationDescriptor
    ) -> ArrayField | ReferenceField | ScalarField:
        type_name = self.build_association_type(scope, association, owner)
        metadata = {
            "optional": not association.always_included,
            "nullable": association.nullable,
            "description": association.description,
            "example": association.example,
            "deprecated": association.deprecated,
        }
        if association.is_collection:
            return ArrayField(of=ReferenceField(to=type_name) if type_name is not None else None, **metadata)
        if type_name is None:
            return ScalarField(type=ScalarKind.OBJECT, **metadata)
        return ReferenceField(to=type_name, **metadata)

    def _attribute_field(
        self,
        scope: Scope,
        resource: ResourceDescriptor,
        attribute: AttributeDescriptor,
        optional: bool,
    ) -> ScalarField:
        return ScalarField(
            type=attribute.type,
            enum=self._enum_reference(scope, resource, attribute) if attribute.enum else None,
            format=attribute.format,
            min=attribute.min,
            max=attribute.max,
            optional=optional,
            nullable=attribute.nullable,
            description=attribute.description,
            example=attribute.example,
            deprecated=attribute.deprecated,
        )

    def _writable_fields(self, scope: Scope, resource: ResourceDescriptor, action: str) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for attribute in resource.attributes.values():
            if attribute.writable_for(action):
                optional = action == "update" or attribute.optional
                fields[attribute.name] = self._attribute_field(scope, resource, attribute, optional=optional)
        for association in resource.associations.values():
            if not association.writable_for(action):
                continue
            _check_association(association)
            fields[association.name] = self._association_payload_field(scope, association)
        return fields

    def _association_payload_field(
        self, scope: Scope, association: AssociationDescriptor
    ) -> ArrayField | ReferenceField | ScalarField:
        target = self.catalog.resolve(association)
        nested = self._nested_payload_reference(scope, target) if target is not None else None
        metadata = {"optional": True, "nullable": association.nullable, "description": association.description}
        if association.is_collection:
            return ArrayField(of=ReferenceField(to=nested) if nested is not None else None, **metadata)
        if nested is None:
            return ScalarField(type=ScalarKind.OBJECT, **metadata)
        return ReferenceField(to=nested, **metadata)

    def _build_payload_object(
        self, scope: Scope, resource: ResourceDescriptor, local_name: str, action: str
    ) -> str | None:
        if not _has_writable(resource, action):
            return None

        def _build(definition: TypeDefinition) -> None:
            fields: dict[str, Any] = {}
            if resource.variant_tag is not None:
                fields[resource.variant_discriminator] = LiteralField(value=resource.variant_tag)
            fields.update(self._writable_fields(scope, resource, action))
            definition.fields = fields

        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    def _build_nested_variant(
        self, scope: Scope, resource: ResourceDescriptor, action: str, allow_destroy: bool
    ) -> str:
        def _build(definition: TypeDefinition) -> None:
            fields: dict[str, Any] = {NESTED_TYPE_FIELD: LiteralField(value=action)}
            fields.update(self._writable_fields(scope, resource, action))
            if action == "update" and allow_destroy:
                fields[NESTED_DESTROY_FIELD] = ScalarField(type=ScalarKind.BOOLEAN, optional=True)
            definition.fields = fields

        local_name = _owned_name(scope, resource, f"nested_{action}_payload")
        return self.registry.register(scope, local_name, TypeKind.OBJECT, _build).name

    def _has_filterable_content(self, resource: ResourceDescriptor, visited: Visited) -> bool:
        for attribute in resource.attributes.values():
            if attribute.filterable and (attribute.enum or builtin_types.filter_type_for(attribute.type)):
                return True
        return any(
            association.filterable and self._is_traversable(association, visited)
            for association in resource.associations.values()
        )

    def _has_sortable_content(self, resource: ResourceDescriptor, visited: Visited) -> bool:
        if any(attribute.sortable for attribute in resource.attributes.values()):
            return True
        return any(
            association.sortable and self._is_traversable(association, visited)
            for association in resource.associations.values()
        )

    def _has_includable(self, scope_name: str, resource: ResourceDescriptor, visited: Visited, depth: int) -> bool:
        """Return whether the include object of *resource* would have any field.

        *visited* already contains *resource*. Always-included associations
        carry no flag of their own, so they count only when their target has
        something includable.
        """
        if depth >= MAX_RECURSION_DEPTH:
            return False
        for association in resource.associations.values():
            if association.is_polymorphic:
                if not association.always_included and self.catalog.resolve_polymorphic(association):
                    return True
                continue
            target = self.catalog.resolve(association)
            if target is None:
                continue
            if not association.always_included:
                return True
            if target.name in visited:
                continue
            if target.contract and target.name != scope_name:
                if self._has_includable(target.name, target, visited | {target.name}, 0):
                    return True
            elif self._has_includable(scope_name, target, visited | {target.name}, depth + 1):
                return True
        return False

    def _is_traversable(self, association: AssociationDescriptor, visited: Visited) -> bool:
        if association.is_polymorphic:
            return False
        target = self.catalog.resolve(association)
        return target is not None and target.name not in visited

    def _is_nested_writable(self, resource: ResourceDescriptor) -> bool:
        return any(
            association.is_writable and association.target == resource.name
            for other in self.catalog
            for association in other.associations.values()
        )

    def _allows_destroy(self, resource: ResourceDescriptor) -> bool:
        return any(
            association.is_writable and association.allow_destroy and association.target == resource.name
            for other in self.catalog
            for association in other.associations.values()
        )


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _compile_key(resource: ResourceDescriptor) -> str:
    return f"compile:{resource.name}"


def _depth_name(kind: str, resource: ResourceDescriptor, depth: int) -> str:
    """Return the bare *kind* at depth 0, ``{resource}_{kind}`` below it."""
    return kind if depth == 0 else f"{resource.name}_{kind}"


def _owned_name(scope: Scope, resource: ResourceDescriptor, local_name: str) -> str:
    """Prefix *local_name* with the resource name unless *resource* owns *scope*."""
    if resource.name == scope.name:
        return local_name
    return qualify(resource.name, local_name)


def _has_writable(resource: ResourceDescriptor, action: str) -> bool:
    return any(a.writable_for(action) for a in resource.attributes.values()) or any(
        a.writable_for(action) for a in resource.associations.values()
    )


def _check_association(association: AssociationDescriptor) -> None:
    """Reject polymorphic associations with flags that need a single target."""
    if not association.is_polymorphic:
        if association.discriminator is not None:
            raise InvalidAssociationError(association.name, "declares a discriminator but no polymorphic targets")
        return
    flags = [
        flag
        for flag, enabled in (
            ("filterable", association.filterable),
            ("sortable", association.sortable),
            ("writable", association.is_writable),
        )
        if enabled
    ]
    if flags:
        raise InvalidAssociationError(association.name, f"polymorphic associations cannot be {' or '.join(flags)}")
