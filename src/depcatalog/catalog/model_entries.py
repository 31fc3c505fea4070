# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Coordinate entry models stored in a version catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from .model_versions import NO_VERSION, VersionConstraint
from .types import JSONValue


class EntryKind(str, Enum):
    """Namespaces an alias can be declared in."""

    LIBRARY = "library"
    VERSION = "version"
    BUNDLE = "bundle"
    PLUGIN = "plugin"

    @property
    def section(self) -> str:
        """Return the snapshot section holding entries of this kind."""

        return _SECTIONS[self]


_SECTIONS = {
    EntryKind.LIBRARY: "libraries",
    EntryKind.VERSION: "versions",
    EntryKind.BUNDLE: "bundles",
    EntryKind.PLUGIN: "plugins",
}


def _version_payload(version: VersionConstraint, version_ref: str | None) -> JSONValue:
    if version_ref is not None:
        return {"ref": version_ref}
    return version.to_dict()


@dataclass(frozen=True, slots=True)
class VersionEntry:
    """Named version declared in the catalog ``versions`` section."""

    alias: str
    constraint: VersionConstraint

    kind = EntryKind.VERSION

    def to_dict(self) -> JSONValue:
        """Return the snapshot representation of the version."""

        return self.constraint.to_dict()


@dataclass(frozen=True, slots=True)
class Dependency:
    """External module coordinate declared as a catalog library."""

    alias: str
    group: str
    name: str
    version: VersionConstraint = field(default=NO_VERSION)
    version_ref: str | None = None

    kind = EntryKind.LIBRARY

    @property
    def module(self) -> str:
        """Return the ``group:name`` module identifier."""

        return f"{self.group}:{self.name}"

    @property
    def coordinate(self) -> str:
        """Return ``group:name:version`` when a single version is known, else the module."""

        single = self.version.single_version()
        if single is None:
            return self.module
        return f"{self.module}:{single}"

    def to_dict(self) -> JSONValue:
        """Return the snapshot representation of the library."""

        payload: dict[str, JSONValue] = {"group": self.group, "name": self.name}
        if self.version_ref is not None or not self.version.is_empty:
            payload["version"] = _version_payload(self.version, self.version_ref)
        return payload

    def __str__(self) -> str:
        return self.coordinate


@dataclass(frozen=True, slots=True)
class Plugin:
    """Build plugin identifier declared in the catalog ``plugins`` section."""

    alias: str
    id: str
    version: VersionConstraint = field(default=NO_VERSION)
    version_ref: str | None = None

    kind = EntryKind.PLUGIN

    @property
    def notation(self) -> str:
        """Return ``id:version`` when a single version is known, else the bare id."""

        single = self.version.single_version()
        if single is None:
            return self.id
        return f"{self.id}:{single}"

    def to_dict(self) -> JSONValue:
        """Return the snapshot representation of the plugin."""

        payload: dict[str, JSONValue] = {"id": self.id}
        if self.version_ref is not None or not self.version.is_empty:
            payload["version"] = _version_payload(self.version, self.version_ref)
        return payload

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True, slots=True)
class Bundle:
    """Ordered group of libraries declared under one alias."""

    alias: str
    members: tuple[Dependency, ...]

    kind = EntryKind.BUNDLE

    def to_dict(self) -> JSONValue:
        """Return the snapshot representation: the member library aliases."""

        return [member.alias for member in self.members]


CoordinateEntry: TypeAlias = Dependency | VersionEntry | Plugin | Bundle

__all__ = [
    "Bundle",
    "CoordinateEntry",
    "Dependency",
    "EntryKind",
    "Plugin",
    "VersionEntry",
]
