# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Standard CRUD actions over a compiled resource scope.

Actions only reference types; they never build resource types themselves.
The resource must have been compiled into *scope* first.
"""

from __future__ import annotations

from typegraph.compiler import builtin_types
from typegraph.model.actions import Action, ActionRequest, ActionResponse
from typegraph.model.descriptors import ResourceDescriptor, ScalarKind
from typegraph.model.types import ArrayField, FieldSpec, ObjectField, ReferenceField, ScalarField
from typegraph.registry.scope import Scope
from typegraph.registry.store import TypeRegistry

# ###############
# Public Interface
# ###############

STANDARD_ACTIONS = ("index", "show", "create", "update", "destroy")


def build_actions(
    registry: TypeRegistry,
    scope: Scope,
    resource: ResourceDescriptor,
    names: list[str] | tuple[str, ...] = STANDARD_ACTIONS,
) -> list[Action]:
    """Build the request/response trees of the standard actions in *names*.

    Args:
        registry: Registry holding the compiled types of *resource*.
        scope: The compiled scope of *resource*.
        resource: The resource the actions operate on.
        names: Standard action names to build, in order.

    Returns:
        One Action per requested name.

    Raises:
        ValueError: If a name is not a standard action.
    """
    actions: list[Action] = []
    for name in names:
        factory = _FACTORIES.get(name)
        if factory is None:
            raise ValueError(f"Unknown action '{name}' for resource '{resource.name}'")
        actions.append(factory(registry, scope, resource))
    if any(action.raises for action in actions):
        builtin_types.register_error_types(registry)
    return actions


# ################
# Implementation
# ################


def _local(scope: Scope, local_name: str) -> str | None:
    definition = scope.lookup(local_name)
    return definition.name if definition is not None else None


def _include_query(scope: Scope) -> dict[str, FieldSpec]:
    include = _local(scope, "include")
    return {"include": ReferenceField(to=include, optional=True)} if include else {}


def _member_response(scope: Scope, resource: ResourceDescriptor) -> ActionResponse:
    return ActionResponse(body=ObjectField(shape={resource.name: ReferenceField(to=scope.qualify(""))}))


def _payload_body(scope: Scope, resource: ResourceDescriptor, action: str) -> dict[str, FieldSpec]:
    payload = _local(scope, f"{action}_payload")
    return {resource.name: ReferenceField(to=payload)} if payload else {}


def _member_path(resource: ResourceDescriptor) -> str:
    return f"/{resource.root_key}/{{id}}"


def _index(registry: TypeRegistry, scope: Scope, resource: ResourceDescriptor) -> Action:
    query: dict[str, FieldSpec] = {}
    filter_name = _local(scope, "filter")
    if filter_name:
        query["filter"] = builtin_types.one_or_many(filter_name)
    sort_name = _local(scope, "sort")
    if sort_name:
        query["sort"] = builtin_types.one_or_many(sort_name)
    query["page"] = ObjectField(
        optional=True,
        shape={
            "number": ScalarField(type=ScalarKind.INTEGER, optional=True, min=1),
            "size": ScalarField(type=ScalarKind.INTEGER, optional=True, min=1),
        },
    )
    query.update(_include_query(scope))

    builtin_types.register_pagination_types(registry)
    body = ObjectField(
        shape={
            resource.root_key: ArrayField(of=ReferenceField(to=scope.qualify(""))),
            "pagination": ReferenceField(to=builtin_types.OFFSET_PAGINATION),
        }
    )
    return Action(
        resource=resource.name,
        name="index",
        method="GET",
        path=f"/{resource.root_key}",
        request=ActionRequest(query=query),
        response=ActionResponse(body=body),
        raises=["bad_request"],
    )


def _show(registry: TypeRegistry, scope: Scope, resource: ResourceDescriptor) -> Action:
    return Action(
        resource=resource.name,
        name="show",
        method="GET",
        path=_member_path(resource),
        request=ActionRequest(query=_include_query(scope)),
        response=_member_response(scope, resource),
        raises=["not_found"],
    )


def _create(registry: TypeRegistry, scope: Scope, resource: ResourceDescriptor) -> Action:
    return Action(
        resource=resource.name,
        name="create",
        method="POST",
        path=f"/{resource.root_key}",
        request=ActionRequest(
            query=_include_query(scope),
            body=_payload_body(scope, resource, "create"),
        ),
        response=_member_response(scope, resource),
        raises=["unprocessable_entity"],
    )


def _update(registry: TypeRegistry, scope: Scope, resource: ResourceDescriptor) -> Action:
    return Action(
        resource=resource.name,
        name="update",
        method="PATCH",
        path=_member_path(resource),
        request=ActionRequest(
            query=_include_query(scope),
            body=_payload_body(scope, resource, "update"),
        ),
        response=_member_response(scope, resource),
        raises=["not_found", "unprocessable_entity"],
    )


def _destroy(registry: TypeRegistry, scope: Scope, resource: ResourceDescriptor) -> Action:
    return Action(
        resource=resource.name,
        name="destroy",
        method="DELETE",
        path=_member_path(resource),
        raises=["not_found"],
    )


_FACTORIES = {
    "index": _index,
    "show": _show,
    "create": _create,
    "update": _update,
    "destroy": _destroy,
}
