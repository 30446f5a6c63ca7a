# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Catalog files for typegraph."""

from typegraph.workspace.config import (
    CATALOG_FILE_NAME,
    CatalogConfig,
    CatalogError,
    CatalogFile,
    ResourceEntry,
    load_catalog,
    parse_catalog,
)

__all__ = [
    "CATALOG_FILE_NAME",
    "CatalogConfig",
    "CatalogError",
    "CatalogFile",
    "ResourceEntry",
    "load_catalog",
    "parse_catalog",
]
