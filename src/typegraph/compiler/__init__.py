# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type graph compiler: builders, built-in types and standard actions.

Catalog-level orchestration lives in :mod:`typegraph.compiler.build`, which
depends on the exporters and is therefore not re-exported here.
"""

from typegraph.compiler.builtin_types import (
    ERROR_RESPONSE_BODY,
    SORT_DIRECTION,
    filter_type_for,
    register_enum_filter,
    register_error_types,
    register_filter_type,
    register_pagination_types,
    register_sort_direction,
)
from typegraph.compiler.contract import STANDARD_ACTIONS, build_actions
from typegraph.compiler.type_graph import MAX_RECURSION_DEPTH, TypeGraphCompiler

__all__ = [
    "ERROR_RESPONSE_BODY",
    "MAX_RECURSION_DEPTH",
    "SORT_DIRECTION",
    "STANDARD_ACTIONS",
    "TypeGraphCompiler",
    "build_actions",
    "filter_type_for",
    "register_enum_filter",
    "register_error_types",
    "register_filter_type",
    "register_pagination_types",
    "register_sort_direction",
]
