# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compile a whole resource catalog into an exportable API.

Every resource that owns a contract is compiled into its own scope of a
shared registry, and its standard actions are built on top. STI variants are
compiled as part of their base resource, never on their own. The resulting
:class:`CompiledApi` exposes the reachable surface and the emission order
consumed by the exporters.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from typegraph.compiler.contract import STANDARD_ACTIONS, build_actions
from typegraph.compiler.type_graph import TypeGraphCompiler
from typegraph.errors import ConfigurationError
from typegraph.export.ordering import EmissionEntry, order
from typegraph.export.surface import Surface, reachable
from typegraph.model.actions import Action
from typegraph.model.descriptors import ResourceCatalog
from typegraph.model.types import TypeDefinition
from typegraph.registry.store import TypeRegistry

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a catalog cannot be compiled.

    Wraps the underlying configuration error with the offending resource.
    """


@dataclass
class CompiledApi:
    """The compiled registry of a catalog together with its exposed actions."""

    registry: TypeRegistry
    actions: list[Action] = field(default_factory=list)

    def surface(self) -> Surface:
        """Return the types and enums reachable from the actions."""
        return reachable(self.registry, self.actions)

    def ordered_types(self) -> list[EmissionEntry]:
        """Return the reachable types in emission order."""
        types, _ = self.surface().select(self.registry)
        return order(types)

    def exported_enums(self) -> dict[str, TypeDefinition]:
        """Return the reachable enums keyed by qualified name."""
        _, enums = self.surface().select(self.registry)
        return enums


def compile_catalog(
    catalog: ResourceCatalog,
    actions: Mapping[str, Sequence[str]] | None = None,
    registry: TypeRegistry | None = None,
) -> CompiledApi:
    """Compile every contract-owning resource of *catalog*.

    Args:
        catalog: The resources to compile.
        actions: Standard action names per resource name. Resources missing
            from the mapping expose no actions. When omitted, every resource
            exposes all standard actions.
        registry: Registry to compile into; a fresh one is created if omitted.

    Returns:
        The compiled API.

    Raises:
        CompilerError: If any resource declaration is invalid.
    """
    registry = registry if registry is not None else TypeRegistry()
    compiler = TypeGraphCompiler(registry, catalog)
    variants = _variant_names(catalog)

    compiled_actions: list[Action] = []
    for resource in catalog:
        if not resource.contract or resource.name in variants:
            continue
        names = STANDARD_ACTIONS if actions is None else actions.get(resource.name, ())
        try:
            scope = compiler.compile(resource)
            compiled_actions.extend(build_actions(registry, scope, resource, names))
        except (ConfigurationError, ValueError) as exc:
            raise CompilerError(f"Cannot compile resource '{resource.name}': {exc}") from exc

    _logger.debug(
        "compiled %d scopes with %d actions", len(registry.scopes()) - 1, len(compiled_actions)
    )
    return CompiledApi(registry=registry, actions=compiled_actions)


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _variant_names(catalog: ResourceCatalog) -> set[str]:
    """Return the names of all resources used as STI variants."""
    names: set[str] = set()
    for resource in catalog:
        if resource.inheritance is not None:
            names.update(resource.inheritance.variants.values())
    return names
