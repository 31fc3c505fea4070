# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Hierarchical alias-to-coordinate lookup for dependency version catalogs."""

from __future__ import annotations

from .accessors import (
    AccessorGroup,
    CatalogAccessors,
    LookupFacility,
    Provider,
    build_accessor_tree,
    render_accessor_module,
)
from .catalog import (
    Bundle,
    CatalogBuilder,
    CatalogError,
    CatalogIntegrityError,
    CatalogValidationError,
    Dependency,
    EntryKind,
    Plugin,
    RichVersionError,
    UnknownAliasError,
    VersionCatalog,
    VersionConstraint,
    load_snapshot,
    write_snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "AccessorGroup",
    "Bundle",
    "CatalogAccessors",
    "CatalogBuilder",
    "CatalogError",
    "CatalogIntegrityError",
    "CatalogValidationError",
    "Dependency",
    "EntryKind",
    "LookupFacility",
    "Plugin",
    "Provider",
    "RichVersionError",
    "UnknownAliasError",
    "VersionCatalog",
    "VersionConstraint",
    "build_accessor_tree",
    "load_snapshot",
    "render_accessor_module",
    "write_snapshot",
]
