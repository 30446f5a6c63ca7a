# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the reachable-surface resolver."""

from typegraph.compiler.builtin_types import register_error_types
from typegraph.export.surface import Surface, reachable
from typegraph.model.actions import Action, ActionRequest, ActionResponse
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import ArrayField, ObjectField, ReferenceField, ScalarField, TypeDefinition, TypeKind
from typegraph.registry import TypeRegistry

# ###############
# Test Helpers
# ###############


def _object(registry: TypeRegistry, name: str, **fields) -> None:
    def _build(definition: TypeDefinition) -> None:
        definition.fields = fields

    registry.register(registry.global_scope, name, TypeKind.OBJECT, _build)


def _registry() -> TypeRegistry:
    """X -> Y -> Z plus an unrelated W and two enums."""
    registry = TypeRegistry()
    registry.register_enum(registry.global_scope, "status", ["open", "closed"])
    registry.register_enum(registry.global_scope, "unused", ["a"])
    _object(registry, "z", state=ScalarField(type=ScalarKind.STRING, enum="status"))
    _object(registry, "y", z=ArrayField(of=ReferenceField(to="z")))
    _object(registry, "x", y=ReferenceField(to="y"), ghost=ReferenceField(to="ghost"))
    _object(registry, "w", x=ReferenceField(to="x"))
    return registry


def _action(**kwargs) -> Action:
    return Action(resource="thing", name="show", **kwargs)


# ###############
# Reachability
# ###############


def test_response_reference_reaches_transitive_types() -> None:
    registry = _registry()
    body = ObjectField(shape={"x": ReferenceField(to="x")})
    surface = reachable(registry, [_action(response=ActionResponse(body=body))])

    assert surface.types == {"x", "y", "z"}
    assert surface.enums == {"status"}


def test_query_and_body_are_seeds() -> None:
    registry = _registry()
    action = _action(
        request=ActionRequest(
            query={"filter": ReferenceField(to="z")},
            body={"thing": ReferenceField(to="w")},
        )
    )
    assert reachable(registry, [action]).types == {"w", "x", "y", "z"}


def test_direct_enum_reference_is_collected_as_enum() -> None:
    registry = _registry()
    surface = reachable(registry, [_action(request=ActionRequest(query={"state": ReferenceField(to="unused")}))])
    assert surface == Surface(types=set(), enums={"unused"})


def test_unregistered_reference_is_skipped() -> None:
    registry = _registry()
    surface = reachable(registry, [_action(response=ActionResponse(body=ReferenceField(to="ghost")))])
    assert surface == Surface()


def test_raising_action_exposes_error_body() -> None:
    registry = _registry()
    register_error_types(registry)
    surface = reachable(registry, [_action(raises=["not_found"])])

    assert surface.types == {"error_response_body", "issue"}
    assert surface.enums == {"layer"}


def test_surface_is_closed_under_references() -> None:
    """Every reference of every reachable type is itself in the surface or unregistered."""
    registry = _registry()
    surface = reachable(registry, [_action(response=ActionResponse(body=ReferenceField(to="w")))])
    types, enums = surface.select(registry)

    for definition in types.values():
        for spec in definition.field_specs():
            if isinstance(spec, ReferenceField) and registry.get(spec.to) is not None:
                assert spec.to in types or spec.to in enums
    assert list(types) == ["z", "y", "x", "w"]
    assert list(enums) == ["status"]
