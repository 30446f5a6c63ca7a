# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for typegraph catalog files.

A catalog file declares the resources of an API under a ``resources``
mapping keyed by resource name::

    resources:
      post:
        plural: posts
        actions: [index, show, create]
        attributes:
          title: {type: string, filterable: true, writable: [create, update]}
          body: text
        associations:
          comments: {cardinality: collection, target: comment}

An attribute given as a plain string is shorthand for ``{type: <string>}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as _Field

from typegraph.compiler.contract import STANDARD_ACTIONS
from typegraph.model.descriptors import (
    AssociationDescriptor,
    AttributeDescriptor,
    Inheritance,
    ResourceCatalog,
    ResourceDescriptor,
)

# ###############
# Public Interface
# ###############

CATALOG_FILE_NAME = "typegraph.yaml"

ActionName = Literal["index", "show", "create", "update", "destroy"]


class CatalogError(Exception):
    """Raised when a catalog file cannot be loaded or is invalid."""


class ResourceEntry(BaseModel):
    """One resource as written in the catalog file."""

    model_config = ConfigDict(extra="forbid")

    plural: str | None = None
    contract: bool = True
    description: str | None = None
    actions: list[ActionName] | None = None
    attributes: dict[str, Any] = _Field(default_factory=dict)
    associations: dict[str, Any] = _Field(default_factory=dict)
    inheritance: Inheritance | None = None


class CatalogFile(BaseModel):
    """Top-level model of a catalog file."""

    model_config = ConfigDict(extra="forbid")

    resources: dict[str, ResourceEntry] = _Field(default_factory=dict)


@dataclass
class CatalogConfig:
    """A loaded catalog together with the actions each resource exposes.

    Attributes:
        catalog: The resource descriptors.
        actions: Standard action names per contract-owning resource.
    """

    catalog: ResourceCatalog
    actions: dict[str, list[str]] = field(default_factory=dict)


def load_catalog(path: Path) -> CatalogConfig:
    """Load and validate a catalog file.

    Args:
        path: Path to the YAML catalog file.

    Returns:
        The parsed catalog configuration.

    Raises:
        CatalogError: If the file cannot be read, contains invalid YAML or
            does not conform to the catalog schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {path}") from None
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog file: {exc}") from exc

    return parse_catalog(text, source_label=str(path))


def parse_catalog(text: str, source_label: str = "<string>") -> CatalogConfig:
    """Parse catalog YAML text into a CatalogConfig.

    Raises:
        CatalogError: If the YAML is invalid or violates the catalog schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatalogError(f"{source_label}: catalog must be a YAML mapping")

    try:
        document = CatalogFile.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog {source_label}: {exc}") from exc

    config = CatalogConfig(catalog=ResourceCatalog())
    for name, entry in document.resources.items():
        config.catalog.add(_build_descriptor(name, entry, source_label))
        if entry.contract:
            config.actions[name] = list(entry.actions if entry.actions is not None else STANDARD_ACTIONS)
    return config


# ################
# Implementation
# ################


def _build_descriptor(name: str, entry: ResourceEntry, source_label: str) -> ResourceDescriptor:
    """Convert a catalog entry into a ResourceDescriptor."""
    location = f"{source_label}: resources.{name}"
    try:
        attributes = {
            attr_name: AttributeDescriptor.model_validate(_named(attr_name, spec, shorthand="type"))
            for attr_name, spec in entry.attributes.items()
        }
        associations = {
            assoc_name: AssociationDescriptor.model_validate(_named(assoc_name, spec, shorthand="target"))
            for assoc_name, spec in entry.associations.items()
        }
        return ResourceDescriptor(
            name=name,
            plural=entry.plural,
            attributes=attributes,
            associations=associations,
            inheritance=entry.inheritance,
            contract=entry.contract,
            description=entry.description,
        )
    except ValidationError as exc:
        raise CatalogError(f"{location}: {exc}") from exc
    except TypeError as exc:
        raise CatalogError(f"{location}: {exc}") from exc


def _named(name: str, spec: object, shorthand: str) -> dict[str, Any]:
    """Return *spec* as a mapping carrying *name*.

    A plain string is shorthand for ``{shorthand: spec}``; an empty entry
    takes every default.
    """
    if spec is None:
        return {"name": name}
    if isinstance(spec, str):
        return {"name": name, shorthand: spec}
    if not isinstance(spec, dict):
        raise TypeError(f"'{name}' must be a mapping or a string")
    return {**spec, "name": name}
