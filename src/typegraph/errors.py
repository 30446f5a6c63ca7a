# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration errors raised while compiling the type graph.

Benign termination (cycles, exhausted depth, unresolvable targets) never
raises; builders return ``None`` or omit the field instead. Everything here
indicates a mistake in the resource declarations and surfaces on first
compilation.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class ConfigurationError(Exception):
    """Base class for all compile-time configuration errors."""


class RedefinitionError(ConfigurationError):
    """Raised when a name is registered twice with different kinds.

    Attributes:
        name: The conflicting qualified name.
        existing_kind: Kind of the definition already registered.
        new_kind: Kind of the rejected registration.
    """

    def __init__(self, name: str, existing_kind: str, new_kind: str) -> None:
        super().__init__(f"Type '{name}' is already registered as {existing_kind}, cannot redefine it as {new_kind}")
        self.name = name
        self.existing_kind = existing_kind
        self.new_kind = new_kind


class UnknownFilterTypeError(ConfigurationError):
    """Raised when a filter type without a known definition is requested by name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown filter type '{name}'")
        self.name = name


class InvalidAssociationError(ConfigurationError):
    """Raised for association declarations that cannot be typed.

    Attributes:
        association: Name of the offending association.
    """

    def __init__(self, association: str, detail: str) -> None:
        super().__init__(f"Association '{association}': {detail}")
        self.association = association


class InvalidInheritanceError(ConfigurationError):
    """Raised for inheritance declarations without a usable discriminator or variant."""

    def __init__(self, resource: str, detail: str) -> None:
        super().__init__(f"Resource '{resource}': {detail}")
        self.resource = resource


class ImportCycleError(ConfigurationError):
    """Raised when name resolution walks an import cycle back to a scope it already left.

    Attributes:
        chain: The aliases followed, in order, including the one closing the cycle.
    """

    def __init__(self, name: str, chain: list[str]) -> None:
        super().__init__(f"Circular import detected while resolving '{name}': {' -> '.join(chain)}")
        self.name = name
        self.chain = chain
