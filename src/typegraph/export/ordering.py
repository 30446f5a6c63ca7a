# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency ordering of type definitions for code generation."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass

from typegraph.model.types import ReferenceField, ScalarField, TypeDefinition, iter_field_specs

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class EmissionEntry:
    """One type in emission order.

    Attributes:
        name: Qualified type name.
        definition: The type definition.
        lazy: True when the declaration may refer to a type that is not yet
            declared (cycle participants and self-referencing types).
    """

    name: str
    definition: TypeDefinition
    lazy: bool = False


def dependencies(definition: TypeDefinition) -> list[str]:
    """Return the names *definition* refers to, in first-seen order."""
    names: dict[str, None] = {}
    for spec in definition.field_specs():
        for nested in iter_field_specs(spec):
            if isinstance(nested, ReferenceField):
                names.setdefault(nested.to)
            elif isinstance(nested, ScalarField) and nested.enum is not None:
                names.setdefault(nested.enum)
    return list(names)


def order(types: Mapping[str, TypeDefinition]) -> list[EmissionEntry]:
    """Order *types* so that dependencies precede their dependents.

    Uses Kahn's algorithm over references between members of *types*
    (self-references excluded). Types left over when the queue drains are
    part of a cycle; they are appended in input order and flagged lazy.
    Every input type appears exactly once.
    """
    refs = {name: dependencies(definition) for name, definition in types.items()}
    pending: dict[str, int] = {}
    dependents: dict[str, list[str]] = {name: [] for name in types}
    for name, names in refs.items():
        in_set = [dep for dep in names if dep in types and dep != name]
        pending[name] = len(in_set)
        for dep in in_set:
            dependents[dep].append(name)

    queue = deque(name for name in types if pending[name] == 0)
    ordered: list[str] = []
    while queue:
        name = queue.popleft()
        ordered.append(name)
        for dependent in dependents[name]:
            pending[dependent] -= 1
            if pending[dependent] == 0:
                queue.append(dependent)

    emitted = set(ordered)
    remaining = [name for name in types if name not in emitted]
    if remaining:
        _logger.debug("types in reference cycles: %s", ", ".join(remaining))

    entries = [EmissionEntry(name, types[name], lazy=name in refs[name]) for name in ordered]
    entries.extend(EmissionEntry(name, types[name], lazy=True) for name in remaining)
    return entries


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)
