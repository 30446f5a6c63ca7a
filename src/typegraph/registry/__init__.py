# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type registry: scoped definitions and import-alias resolution."""

from typegraph.registry.scope import Scope, qualify
from typegraph.registry.store import TypeBuilder, TypeRegistry

__all__ = [
    "Scope",
    "TypeBuilder",
    "TypeRegistry",
    "qualify",
]
