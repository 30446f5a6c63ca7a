# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scopes and import-alias resolution.

A scope is the namespace of one compilation unit (one contract). It owns its
local type definitions and a set of import edges ``alias -> scope``. Names
prefixed with an alias (``alias_name``) are resolved in the imported scope,
which makes a type compiled once reusable from every scope that imports it.

Scopes form a directed graph that may contain cycles. Resolution only fails
when it actually has to re-enter a scope it is already resolving through:
a mutual import ``A <-> B`` resolving a name that lives directly in ``B``
succeeds, while ``A -> B -> C -> A`` resolving ``b_c_a_x`` raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from typegraph.errors import ConfigurationError, ImportCycleError
from typegraph.model.types import TypeDefinition

# ###############
# Public Interface
# ###############


def qualify(prefix: str, name: str) -> str:
    """Join a scope name or import alias with a local name.

    An empty side is dropped, so the root type of scope ``post`` is ``post``
    and the global scope does not prefix its names at all.
    """
    if not prefix:
        return name
    if not name:
        return prefix
    return f"{prefix}_{name}"


@dataclass(eq=False)
class Scope:
    """A namespace of type definitions plus import edges to other scopes.

    Attributes:
        name: Scope name, used as the prefix of every qualified name in it.
            The global (API-level) scope has the empty name.
        parent: Scope consulted after local definitions and imports.
        definitions: Local definitions keyed by local name.
        imports: Import edges keyed by alias, in declaration order.
    """

    name: str
    parent: Scope | None = None
    definitions: dict[str, TypeDefinition] = field(default_factory=dict)
    imports: dict[str, Scope] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Scope({self.name!r})"

    def qualify(self, local_name: str) -> str:
        """Return the qualified name of *local_name* in this scope."""
        return qualify(self.name, local_name)

    def lookup(self, local_name: str) -> TypeDefinition | None:
        """Return a local definition without following imports."""
        return self.definitions.get(local_name)

    def import_scope(self, other: Scope, alias: str) -> bool:
        """Record an import edge; return True if the edge is new.

        Re-importing the same scope under the same alias is a no-op.

        Raises:
            ConfigurationError: If *alias* is already bound to another scope.
        """
        existing = self.imports.get(alias)
        if existing is other:
            return False
        if existing is None:
            existing = self.imports.setdefault(alias, other)
        if existing is not other:
            raise ConfigurationError(
                f"Alias '{alias}' in scope '{self.name}' already imports '{existing.name}', "
                f"cannot import '{other.name}'"
            )
        _logger.debug("scope %r imports %r as %r", self.name, other.name, alias)
        return True

    def resolve(self, name: str) -> TypeDefinition | None:
        """Resolve *name* locally, through import aliases, then in the parent.

        Returns:
            The first matching definition, or None.

        Raises:
            ImportCycleError: If resolution has to re-enter a scope it is
                already resolving through.
        """
        return _resolve(self, name, entered=(), chain=())


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _resolve(
    scope: Scope,
    name: str,
    *,
    entered: tuple[Scope, ...],
    chain: tuple[str, ...],
) -> TypeDefinition | None:
    """Resolve *name* in *scope*, tracking the scopes entered along the alias chain."""
    if any(s is scope for s in entered):
        raise ImportCycleError(_requested_name(chain, name), list(chain))
    entered = (*entered, scope)

    local = scope.definitions.get(name)
    if local is not None:
        return local

    for alias, imported in list(scope.imports.items()):
        if name == alias:
            remainder = ""
        elif name.startswith(alias + "_"):
            remainder = name[len(alias) + 1 :]
        else:
            continue
        found = _resolve(imported, remainder, entered=entered, chain=(*chain, alias))
        if found is not None:
            return found

    if scope.parent is not None and not any(s is scope.parent for s in entered):
        return _resolve(scope.parent, name, entered=entered, chain=chain)
    return None


def _requested_name(chain: tuple[str, ...], remainder: str) -> str:
    """Rebuild the originally requested name from the alias chain."""
    requested = remainder
    for alias in reversed(chain):
        requested = qualify(alias, requested)
    return requested
