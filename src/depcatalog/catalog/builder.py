# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Builder that validates declarations and materialises a catalog store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import cast

from .aliases import alias_segments, check_library_alias, normalize_alias
from .errors import CatalogIntegrityError, CatalogValidationError
from .model_catalog import VersionCatalog
from .model_entries import Bundle, CoordinateEntry, Dependency, EntryKind, Plugin, VersionEntry
from .model_versions import NO_VERSION, VersionConstraint
from .types import DEFAULT_CATALOG_NAME, JSONValue
from .utils import expect_mapping, expect_string, optional_mapping, optional_string, string_array

LOGGER = logging.getLogger(__name__)

VERSION_REF_KEY = "ref"


@dataclass(frozen=True, slots=True)
class _Declaration:
    """Raw declaration recorded by the builder before validation."""

    kind: EntryKind
    alias: str
    payload: tuple[object, ...]
    version: VersionConstraint | None = None
    version_ref: str | None = None


@dataclass(slots=True)
class CatalogBuilder:
    """Collect catalog declarations and build an immutable :class:`VersionCatalog`.

    Declarations are validated lazily in :meth:`build`, so libraries may
    reference versions declared after them.
    """

    name: str = DEFAULT_CATALOG_NAME
    _declarations: list[_Declaration] = field(default_factory=list, repr=False)

    def version(self, alias: str, constraint: str | VersionConstraint | Mapping[str, JSONValue]) -> CatalogBuilder:
        """Declare a named version.

        Args:
            alias: Version alias such as ``"ktor"``.
            constraint: Version literal or rich constraint.

        Returns:
            CatalogBuilder: ``self`` for chaining.
        """

        parsed = VersionConstraint.from_value(constraint, context=self._context(EntryKind.VERSION, alias))
        self._declarations.append(_Declaration(EntryKind.VERSION, alias, (), version=parsed))
        return self

    def library(
        self,
        alias: str,
        group: str,
        name: str,
        *,
        version: str | VersionConstraint | Mapping[str, JSONValue] | None = None,
        version_ref: str | None = None,
    ) -> CatalogBuilder:
        """Declare a library coordinate.

        Args:
            alias: Library alias such as ``"kotlinx.coroutines.debug"``.
            group: Module group, e.g. ``"org.jetbrains.kotlinx"``.
            name: Module name, e.g. ``"kotlinx-coroutines-debug"``.
            version: Optional inline version literal or rich constraint.
            version_ref: Optional alias of a declared version.

        Returns:
            CatalogBuilder: ``self`` for chaining.
        """

        context = self._context(EntryKind.LIBRARY, alias)
        parsed = None if version is None else VersionConstraint.from_value(version, context=context)
        self._declarations.append(
            _Declaration(EntryKind.LIBRARY, alias, (group, name), version=parsed, version_ref=version_ref),
        )
        return self

    def library_module(
        self,
        alias: str,
        module: str,
        *,
        version: str | VersionConstraint | Mapping[str, JSONValue] | None = None,
        version_ref: str | None = None,
    ) -> CatalogBuilder:
        """Declare a library from a ``group:name`` module string."""

        group, name = _split_module(module, context=self._context(EntryKind.LIBRARY, alias))
        return self.library(alias, group, name, version=version, version_ref=version_ref)

    def bundle(self, alias: str, members: Iterable[str]) -> CatalogBuilder:
        """Declare a bundle of library aliases."""

        self._declarations.append(_Declaration(EntryKind.BUNDLE, alias, tuple(members)))
        return self

    def plugin(
        self,
        alias: str,
        plugin_id: str,
        *,
        version: str | VersionConstraint | Mapping[str, JSONValue] | None = None,
        version_ref: str | None = None,
    ) -> CatalogBuilder:
        """Declare a build plugin identifier."""

        context = self._context(EntryKind.PLUGIN, alias)
        parsed = None if version is None else VersionConstraint.from_value(version, context=context)
        self._declarations.append(
            _Declaration(EntryKind.PLUGIN, alias, (plugin_id,), version=parsed, version_ref=version_ref),
        )
        return self

    def build(self) -> VersionCatalog:
        """Validate every declaration and return the immutable store.

        Returns:
            VersionCatalog: Catalog containing every declared entry.

        Raises:
            CatalogValidationError: If an alias or coordinate is malformed.
            CatalogIntegrityError: On duplicate aliases, unknown version
                references or bundle members, conflicting version fields,
                or aliases whose accessor names collide.
        """

        tables: dict[EntryKind, dict[str, CoordinateEntry]] = {kind: {} for kind in EntryKind}
        ordered = sorted(self._declarations, key=lambda item: _BUILD_ORDER[item.kind])
        for declaration in ordered:
            context = self._context(declaration.kind, declaration.alias)
            alias = normalize_alias(declaration.alias, context=context)
            table = tables[declaration.kind]
            if alias in table:
                raise CatalogIntegrityError(
                    f"{self.name}: duplicate {declaration.kind.value} alias '{alias}'",
                )
            table[alias] = self._materialise(declaration, alias, tables, context=context)
        for kind, table in tables.items():
            _check_accessor_names(self.name, kind, table)
        catalog = VersionCatalog(name=self.name, _entries=tables)
        LOGGER.debug(
            "built catalog %s with %d entries (checksum %s)",
            self.name,
            len(catalog),
            catalog.checksum,
        )
        return catalog

    @classmethod
    def from_mapping(cls, data: Mapping[str, JSONValue], *, name: str | None = None) -> CatalogBuilder:
        """Create a builder populated from a snapshot mapping.

        Args:
            data: Mapping with optional ``versions``, ``libraries``, ``bundles``
                and ``plugins`` tables.
            name: Catalog name overriding the mapping's ``name`` key.

        Returns:
            CatalogBuilder: Builder holding every declaration from ``data``.
        """

        catalog_name = name or optional_string(data.get("name"), key="name", context="<snapshot>")
        builder = cls(name=catalog_name or DEFAULT_CATALOG_NAME)
        context = builder.name
        for alias, value in optional_mapping(data.get("versions"), key="versions", context=context).items():
            builder.version(alias, _constraint_value(value, context=f"{context}.versions.{alias}"))
        for alias, value in optional_mapping(data.get("libraries"), key="libraries", context=context).items():
            entry_context = f"{context}.libraries.{alias}"
            mapping = expect_mapping(value, key=alias, context=f"{context}.libraries")
            version, version_ref = _version_field(mapping.get("version"), context=entry_context)
            module = optional_string(mapping.get("module"), key="module", context=entry_context)
            if module is not None:
                if "group" in mapping or "name" in mapping:
                    raise CatalogValidationError(
                        f"{entry_context}: 'module' cannot be combined with 'group'/'name'",
                    )
                builder.library_module(alias, module, version=version, version_ref=version_ref)
                continue
            builder.library(
                alias,
                expect_string(mapping.get("group"), key="group", context=entry_context),
                expect_string(mapping.get("name"), key="name", context=entry_context),
                version=version,
                version_ref=version_ref,
            )
        for alias, value in optional_mapping(data.get("bundles"), key="bundles", context=context).items():
            builder.bundle(alias, string_array(value, key=alias, context=f"{context}.bundles"))
        for alias, value in optional_mapping(data.get("plugins"), key="plugins", context=context).items():
            entry_context = f"{context}.plugins.{alias}"
            mapping = expect_mapping(value, key=alias, context=f"{context}.plugins")
            version, version_ref = _version_field(mapping.get("version"), context=entry_context)
            builder.plugin(
                alias,
                expect_string(mapping.get("id"), key="id", context=entry_context),
                version=version,
                version_ref=version_ref,
            )
        return builder

    def _context(self, kind: EntryKind, alias: str) -> str:
        return f"{self.name}.{kind.section}.{alias}"

    def _materialise(
        self,
        declaration: _Declaration,
        alias: str,
        tables: Mapping[EntryKind, Mapping[str, CoordinateEntry]],
        *,
        context: str,
    ) -> CoordinateEntry:
        """Turn a raw declaration into its entry, resolving references."""

        kind = declaration.kind
        if kind is EntryKind.VERSION:
            return VersionEntry(alias=alias, constraint=declaration.version or NO_VERSION)
        if kind is EntryKind.BUNDLE:
            return self._bundle(alias, declaration.payload, tables[EntryKind.LIBRARY], context=context)
        version, version_ref = self._resolve_version(declaration, tables[EntryKind.VERSION], context=context)
        if kind is EntryKind.LIBRARY:
            check_library_alias(alias, context=context)
            group, name = cast(tuple[JSONValue, JSONValue], declaration.payload)
            return Dependency(
                alias=alias,
                group=expect_string(group, key="group", context=context),
                name=expect_string(name, key="name", context=context),
                version=version,
                version_ref=version_ref,
            )
        (plugin_id,) = cast(tuple[JSONValue], declaration.payload)
        return Plugin(
            alias=alias,
            id=expect_string(plugin_id, key="id", context=context),
            version=version,
            version_ref=version_ref,
        )

    def _resolve_version(
        self,
        declaration: _Declaration,
        versions: Mapping[str, CoordinateEntry],
        *,
        context: str,
    ) -> tuple[VersionConstraint, str | None]:
        if declaration.version is not None and declaration.version_ref is not None:
            raise CatalogIntegrityError(f"{context}: declare either 'version' or 'version_ref', not both")
        if declaration.version_ref is None:
            return declaration.version or NO_VERSION, None
        ref = normalize_alias(declaration.version_ref, context=f"{context}.version.ref")
        entry = versions.get(ref)
        if not isinstance(entry, VersionEntry):
            raise CatalogIntegrityError(f"{context}: version reference '{ref}' is not declared")
        return entry.constraint, ref

    def _bundle(
        self,
        alias: str,
        members: tuple[object, ...],
        libraries: Mapping[str, CoordinateEntry],
        *,
        context: str,
    ) -> Bundle:
        if not members:
            raise CatalogIntegrityError(f"{context}: bundle must reference at least one library")
        resolved: list[Dependency] = []
        for member in members:
            member_alias = normalize_alias(str(member), context=context)
            entry = libraries.get(member_alias)
            if not isinstance(entry, Dependency):
                raise CatalogIntegrityError(
                    f"{context}: bundle member '{member_alias}' is not a declared library",
                )
            resolved.append(entry)
        return Bundle(alias=alias, members=tuple(resolved))


_BUILD_ORDER = {
    EntryKind.VERSION: 0,
    EntryKind.LIBRARY: 1,
    EntryKind.PLUGIN: 2,
    EntryKind.BUNDLE: 3,
}


def _check_accessor_names(catalog: str, kind: EntryKind, aliases: Iterable[str]) -> None:
    """Reject aliases that would share an accessor at the same level of the tree.

    Segments differing only in case boundaries, such as ``jsonAPI`` and
    ``jsonApi``, map onto one attribute name.

    Raises:
        CatalogIntegrityError: If two aliases collide; both are named.
    """

    from ..accessors.naming import attribute_name

    claimed: dict[tuple[str, ...], tuple[tuple[str, ...], str]] = {}
    for alias in sorted(aliases):
        segments = alias_segments(alias)
        for depth in range(1, len(segments) + 1):
            key = tuple(attribute_name(segment) for segment in segments[:depth])
            owner = claimed.setdefault(key, (segments[:depth], alias))
            if owner[0] != segments[:depth]:
                raise CatalogIntegrityError(
                    f"{catalog}: {kind.value} aliases '{owner[1]}' and '{alias}' map onto the same "
                    f"accessor '{'.'.join(key)}'",
                )


def _split_module(module: str, *, context: str) -> tuple[str, str]:
    parts = module.split(":")
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise CatalogValidationError(f"{context}: module '{module}' must use the 'group:name' form")
    return parts[0], parts[1]


def _constraint_value(value: JSONValue, *, context: str) -> str | Mapping[str, JSONValue]:
    if isinstance(value, str):
        return value
    return expect_mapping(value, key="version", context=context)


def _version_field(
    value: JSONValue | None,
    *,
    context: str,
) -> tuple[str | Mapping[str, JSONValue] | None, str | None]:
    """Split a snapshot ``version`` field into an inline constraint or a reference."""

    if value is None:
        return None, None
    if isinstance(value, Mapping) and VERSION_REF_KEY in value:
        if len(value) != 1:
            raise CatalogValidationError(f"{context}: 'version.ref' cannot be combined with other keys")
        return None, expect_string(value[VERSION_REF_KEY], key="version.ref", context=context)
    return _constraint_value(value, context=context), None


__all__ = ["CatalogBuilder"]
