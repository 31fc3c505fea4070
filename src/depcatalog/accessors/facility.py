# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generic resolve-by-alias operations shared by every accessor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Literal, TypeAlias

from ..catalog.errors import RichVersionError
from ..catalog.model_catalog import VersionCatalog
from ..catalog.model_entries import Dependency, EntryKind, Plugin
from ..catalog.model_versions import VersionConstraint
from .provider import Provider

LOGGER = logging.getLogger(__name__)

RichVersionPolicy: TypeAlias = Literal["empty", "error"]
EMPTY_VERSION_POLICY: Final[RichVersionPolicy] = "empty"
ERROR_VERSION_POLICY: Final[RichVersionPolicy] = "error"


@dataclass(frozen=True, slots=True)
class LookupFacility:
    """Produce deferred handles for catalog aliases.

    Every ``resolve_*`` call returns immediately; the catalog is only
    consulted when the returned :class:`Provider` is forced.
    """

    catalog: VersionCatalog
    rich_version_policy: RichVersionPolicy = EMPTY_VERSION_POLICY

    def __post_init__(self) -> None:
        if self.rich_version_policy not in (EMPTY_VERSION_POLICY, ERROR_VERSION_POLICY):
            raise ValueError(f"unknown rich version policy '{self.rich_version_policy}'")

    def require(self, alias: str, kind: EntryKind) -> str:
        """Eagerly check that ``alias`` exists under ``kind``.

        Returns:
            str: ``alias`` unchanged.

        Raises:
            UnknownAliasError: If the catalog does not declare ``alias``.
        """

        self.catalog.lookup(alias, kind)
        return alias

    def resolve_dependency(self, alias: str) -> Provider[Dependency]:
        """Return a deferred handle on the library declared as ``alias``."""

        return Provider(lambda: self.catalog.library(alias), description=f"library '{alias}'")

    def resolve_version(self, alias: str) -> Provider[str]:
        """Return a deferred handle on the single version string named ``alias``.

        Rich constraints with no single-string form resolve to ``""`` under the
        ``"empty"`` policy and raise :class:`RichVersionError` under ``"error"``.
        """

        return Provider(lambda: self._version_string(alias), description=f"version '{alias}'")

    def resolve_version_constraint(self, alias: str) -> Provider[VersionConstraint]:
        """Return a deferred handle on the full constraint named ``alias``."""

        return Provider(
            lambda: self.catalog.version(alias).constraint,
            description=f"version constraint '{alias}'",
        )

    def resolve_plugin(self, alias: str) -> Provider[Plugin]:
        """Return a deferred handle on the plugin declared as ``alias``."""

        return Provider(lambda: self.catalog.plugin(alias), description=f"plugin '{alias}'")

    def resolve_bundle(self, alias: str) -> Provider[tuple[Dependency, ...]]:
        """Return a deferred handle on the libraries grouped under bundle ``alias``."""

        return Provider(lambda: self.catalog.bundle(alias).members, description=f"bundle '{alias}'")

    def resolve(self, alias: str, kind: EntryKind) -> Provider[Any]:
        """Dispatch to the ``resolve_*`` operation matching ``kind``."""

        if kind is EntryKind.LIBRARY:
            return self.resolve_dependency(alias)
        if kind is EntryKind.VERSION:
            return self.resolve_version(alias)
        if kind is EntryKind.BUNDLE:
            return self.resolve_bundle(alias)
        return self.resolve_plugin(alias)

    def _version_string(self, alias: str) -> str:
        constraint = self.catalog.version(alias).constraint
        single = constraint.single_version()
        if single is not None:
            return single
        if self.rich_version_policy == ERROR_VERSION_POLICY:
            raise RichVersionError(
                f"{self.catalog.name}: version '{alias}' is a rich constraint {constraint.display_name}",
            )
        LOGGER.debug("version %s is a rich constraint %s; resolving to ''", alias, constraint.display_name)
        return ""


__all__ = [
    "EMPTY_VERSION_POLICY",
    "ERROR_VERSION_POLICY",
    "LookupFacility",
    "RichVersionPolicy",
]
