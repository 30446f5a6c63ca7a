# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reachability of registered types from a set of exposed actions.

The registry holds every type compiled for every scope. Exporters only need
the types an API surface actually exposes: those referenced by an action's
request query, request body or response body, plus everything those types
reference in turn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from typegraph.compiler.builtin_types import ERROR_RESPONSE_BODY
from typegraph.model.actions import Action
from typegraph.model.types import FieldSpec, ReferenceField, ScalarField, TypeDefinition, TypeKind, iter_field_specs
from typegraph.registry.store import TypeRegistry

# ###############
# Public Interface
# ###############


@dataclass
class Surface:
    """Names of the types and enums reachable from a set of actions."""

    types: set[str] = field(default_factory=set)
    enums: set[str] = field(default_factory=set)

    def select(self, registry: TypeRegistry) -> tuple[dict[str, TypeDefinition], dict[str, TypeDefinition]]:
        """Slice *registry* down to this surface.

        Returns:
            ``(types, enums)`` mappings from qualified name to definition, in
            registration order.
        """
        types = {name: d for name, d in registry.types().items() if name in self.types}
        enums = {name: d for name, d in registry.enums().items() if name in self.enums}
        return types, enums


def reachable(registry: TypeRegistry, actions: Iterable[Action]) -> Surface:
    """Compute the types and enums transitively reachable from *actions*.

    Seeds are collected from every action's query, body and response trees.
    The type set is then expanded to a fixed point by scanning the field
    trees of the types collected so far; enums are gathered from the seeds
    and from every reachable type.
    """
    definitions = registry.definitions()
    surface = Surface()
    pending: list[str] = []

    def _visit(spec: FieldSpec) -> None:
        for nested in iter_field_specs(spec):
            if isinstance(nested, ScalarField) and nested.enum is not None:
                surface.enums.add(nested.enum)
            elif isinstance(nested, ReferenceField):
                _add(nested.to)

    def _add(name: str) -> None:
        definition = definitions.get(name)
        if definition is None:
            _logger.debug("skipping reference to unregistered type %r", name)
        elif definition.kind is TypeKind.ENUM:
            surface.enums.add(name)
        elif name not in surface.types:
            surface.types.add(name)
            pending.append(name)

    for action in actions:
        for spec in _action_specs(action):
            _visit(spec)
        if action.raises:
            _add(ERROR_RESPONSE_BODY)

    while pending:
        for spec in definitions[pending.pop()].field_specs():
            _visit(spec)

    _logger.debug("surface covers %d types and %d enums", len(surface.types), len(surface.enums))
    return surface


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _action_specs(action: Action) -> list[FieldSpec]:
    specs: list[FieldSpec] = [*action.request.query.values(), *action.request.body.values()]
    if action.response.body is not None:
        specs.append(action.response.body)
    return specs
