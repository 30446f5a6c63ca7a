# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide registry of compiled type definitions.

Registration follows a reserve-then-populate discipline: the definition is
inserted under its name *before* its builder runs, so a builder that refers
to the name it is building (directly or through another builder) finds a
forward reference instead of re-entering itself. Insertion uses
``dict.setdefault`` (insert-if-absent, else return existing), so concurrent
first callers converge on one definition and only the winner populates it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from typegraph.errors import ConfigurationError, RedefinitionError
from typegraph.model.descriptors import ScalarKind
from typegraph.model.types import TypeDefinition, TypeKind
from typegraph.registry.scope import Scope

# ###############
# Public Interface
# ###############

TypeBuilder = Callable[[TypeDefinition], None]


class TypeRegistry:
    """Scoped key/definition store for objects, unions, enums and builtin references."""

    def __init__(self) -> None:
        self.global_scope = Scope("")
        self._scopes: dict[str, Scope] = {}
        self._claims: dict[str, object] = {}

    def scope(self, name: str) -> Scope:
        """Return the scope named *name*, creating it on first use."""
        existing = self._scopes.get(name)
        if existing is not None:
            return existing
        return self._scopes.setdefault(name, Scope(name, parent=self.global_scope))

    def has_scope(self, name: str) -> bool:
        return name in self._scopes

    def scopes(self) -> list[Scope]:
        """Return the global scope followed by every named scope in creation order."""
        return [self.global_scope, *self._scopes.values()]

    def claim(self, key: str) -> bool:
        """Atomically claim *key*; only the first caller gets True."""
        token = object()
        return self._claims.setdefault(key, token) is token

    def register(
        self,
        scope: Scope,
        name: str,
        kind: TypeKind,
        builder: TypeBuilder | None = None,
    ) -> TypeDefinition:
        """Reserve *name* in *scope* and populate it with *builder*.

        If *name* is already registered locally with the same kind, the
        existing definition is returned and *builder* is not invoked.

        Raises:
            RedefinitionError: If *name* is registered with a different kind.
        """
        if kind is TypeKind.ENUM:
            raise ConfigurationError(f"Use register_enum() to register enum '{scope.qualify(name)}'")

        definition = TypeDefinition(name=scope.qualify(name), kind=kind)
        existing = scope.definitions.setdefault(name, definition)
        if existing is not definition:
            _check_kind(existing, kind)
            return existing

        _logger.debug("registered %s %r", kind.value, definition.name)
        if builder is not None:
            try:
                builder(definition)
            except ConfigurationError:
                scope.definitions.pop(name, None)
                raise
        return definition

    def register_enum(self, scope: Scope, name: str, values: Iterable[str]) -> TypeDefinition:
        """Register an enum, merging values into an existing enum of the same name.

        Unlike objects and unions (first writer wins), repeated enum
        registrations union their value sets, preserving first-seen order.

        Raises:
            RedefinitionError: If *name* is registered with a different kind.
        """
        values = list(dict.fromkeys(values))
        definition = TypeDefinition(name=scope.qualify(name), kind=TypeKind.ENUM, values=values)
        existing = scope.definitions.setdefault(name, definition)
        if existing is definition:
            _logger.debug("registered enum %r with %d values", definition.name, len(values))
            return definition

        _check_kind(existing, TypeKind.ENUM)
        for value in values:
            if value not in existing.values:
                existing.values.append(value)
        return existing

    def register_builtin(self, scope: Scope, name: str, target: ScalarKind) -> TypeDefinition:
        """Register *name* as an alias of the builtin scalar *target*."""

        def _build(definition: TypeDefinition) -> None:
            definition.target = target

        return self.register(scope, name, TypeKind.BUILTIN, _build)

    def resolve(self, scope: Scope, name: str) -> TypeDefinition | None:
        """Resolve *name* from *scope* (locals, then imports, then the global scope)."""
        return scope.resolve(name)

    def import_scope(self, scope: Scope, other: Scope, alias: str) -> bool:
        """Import *other* into *scope* under *alias*; re-importing is a no-op."""
        return scope.import_scope(other, alias)

    def get(self, qualified_name: str) -> TypeDefinition | None:
        """Return the definition registered under a fully qualified name."""
        for scope in self.scopes():
            for definition in list(scope.definitions.values()):
                if definition.name == qualified_name:
                    return definition
        return None

    def definitions(self) -> dict[str, TypeDefinition]:
        """Return every definition of every scope keyed by qualified name."""
        result: dict[str, TypeDefinition] = {}
        for scope in self.scopes():
            for definition in list(scope.definitions.values()):
                result.setdefault(definition.name, definition)
        return result

    def types(self) -> dict[str, TypeDefinition]:
        """Return all non-enum definitions keyed by qualified name."""
        return {name: d for name, d in self.definitions().items() if d.kind is not TypeKind.ENUM}

    def enums(self) -> dict[str, TypeDefinition]:
        """Return all enum definitions keyed by qualified name."""
        return {name: d for name, d in self.definitions().items() if d.kind is TypeKind.ENUM}


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _check_kind(existing: TypeDefinition, kind: TypeKind) -> None:
    """Raise if *existing* was registered with a kind other than *kind*."""
    if existing.kind is not kind:
        raise RedefinitionError(existing.name, existing.kind.value, kind.value)
