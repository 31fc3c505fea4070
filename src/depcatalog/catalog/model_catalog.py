# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog store aggregating every entry declared in a version catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import cast

from .checksum import compute_catalog_checksum
from .errors import UnknownAliasError
from .model_entries import Bundle, CoordinateEntry, Dependency, EntryKind, Plugin, VersionEntry
from .types import SNAPSHOT_SCHEMA_VERSION, JSONValue


@dataclass(frozen=True, slots=True)
class VersionCatalog:
    """Immutable alias-to-coordinate store.

    Entries are keyed by normalised alias within each :class:`EntryKind`, so
    the same alias may name both a library and a version.
    """

    name: str
    _entries: Mapping[EntryKind, Mapping[str, CoordinateEntry]]
    _checksum: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Freeze the entry tables and compute the content checksum."""

        frozen = {
            kind: MappingProxyType(dict(self._entries.get(kind, {})))
            for kind in EntryKind
        }
        object.__setattr__(self, "_entries", MappingProxyType(frozen))
        object.__setattr__(self, "_checksum", compute_catalog_checksum(self.to_dict()))

    @property
    def checksum(self) -> str:
        """Return the SHA-256 checksum of the catalog contents."""

        return self._checksum

    def lookup(self, alias: str, kind: EntryKind = EntryKind.LIBRARY) -> CoordinateEntry:
        """Return the entry registered for ``alias`` under ``kind``.

        Args:
            alias: Normalised, dot-separated alias.
            kind: Namespace to consult.

        Returns:
            CoordinateEntry: Entry stored for the alias.

        Raises:
            UnknownAliasError: If ``alias`` is not declared under ``kind``.
        """

        try:
            return self._entries[kind][alias]
        except KeyError as exc:
            raise UnknownAliasError(alias, kind, catalog=self.name) from exc

    def contains(self, alias: str, kind: EntryKind = EntryKind.LIBRARY) -> bool:
        """Return ``True`` when ``alias`` is declared under ``kind``."""

        return alias in self._entries[kind]

    def aliases(self, kind: EntryKind) -> tuple[str, ...]:
        """Return every alias declared under ``kind`` in sorted order."""

        return tuple(sorted(self._entries[kind]))

    def entries(self, kind: EntryKind) -> Mapping[str, CoordinateEntry]:
        """Return the read-only entry table for ``kind``."""

        return self._entries[kind]

    def library(self, alias: str) -> Dependency:
        """Return the library declared as ``alias``."""

        return cast(Dependency, self.lookup(alias, EntryKind.LIBRARY))

    def version(self, alias: str) -> VersionEntry:
        """Return the version declared as ``alias``."""

        return cast(VersionEntry, self.lookup(alias, EntryKind.VERSION))

    def bundle(self, alias: str) -> Bundle:
        """Return the bundle declared as ``alias``."""

        return cast(Bundle, self.lookup(alias, EntryKind.BUNDLE))

    def plugin(self, alias: str) -> Plugin:
        """Return the plugin declared as ``alias``."""

        return cast(Plugin, self.lookup(alias, EntryKind.PLUGIN))

    def to_dict(self) -> dict[str, JSONValue]:
        """Return the JSON snapshot payload describing this catalog."""

        payload: dict[str, JSONValue] = {
            "schemaVersion": SNAPSHOT_SCHEMA_VERSION,
            "name": self.name,
        }
        for kind in (EntryKind.VERSION, EntryKind.LIBRARY, EntryKind.BUNDLE, EntryKind.PLUGIN):
            table = self._entries[kind]
            payload[kind.section] = {alias: table[alias].to_dict() for alias in sorted(table)}
        return payload

    def __len__(self) -> int:
        return sum(len(table) for table in self._entries.values())


__all__ = ["VersionCatalog"]
