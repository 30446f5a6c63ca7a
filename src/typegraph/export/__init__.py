# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Surface resolution, emission ordering and target exporters."""

from typegraph.export.json_schema import render_json_schema, to_json_schema
from typegraph.export.ordering import EmissionEntry, dependencies, order
from typegraph.export.surface import Surface, reachable
from typegraph.export.zod import render_zod, schema_name

__all__ = [
    "EmissionEntry",
    "Surface",
    "dependencies",
    "order",
    "reachable",
    "render_json_schema",
    "render_zod",
    "schema_name",
    "to_json_schema",
]
