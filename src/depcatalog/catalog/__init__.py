# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the version catalog store."""

from __future__ import annotations

from typing import Final

from .aliases import alias_segments, is_within, normalize_alias
from .builder import CatalogBuilder
from .errors import (
    CatalogError,
    CatalogIntegrityError,
    CatalogValidationError,
    RichVersionError,
    UnknownAliasError,
)
from .io import load_snapshot, write_snapshot
from .model_catalog import VersionCatalog
from .model_entries import Bundle, CoordinateEntry, Dependency, EntryKind, Plugin, VersionEntry
from .model_versions import VersionConstraint

__all__: Final[tuple[str, ...]] = (
    "Bundle",
    "CatalogBuilder",
    "CatalogError",
    "CatalogIntegrityError",
    "CatalogValidationError",
    "CoordinateEntry",
    "Dependency",
    "EntryKind",
    "Plugin",
    "RichVersionError",
    "UnknownAliasError",
    "VersionCatalog",
    "VersionConstraint",
    "VersionEntry",
    "alias_segments",
    "is_within",
    "load_snapshot",
    "normalize_alias",
    "write_snapshot",
)
