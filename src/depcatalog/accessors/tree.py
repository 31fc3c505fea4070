# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generic accessor tree mirroring the dot hierarchy of catalog aliases."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..catalog.aliases import alias_segments, is_within, join_alias, normalize_alias
from ..catalog.errors import CatalogIntegrityError
from ..catalog.model_catalog import VersionCatalog
from ..catalog.model_entries import EntryKind
from .facility import EMPTY_VERSION_POLICY, LookupFacility, RichVersionPolicy
from .naming import attribute_name
from .provider import Provider

LOGGER = logging.getLogger(__name__)

DeclaredAliases = Mapping[EntryKind, Iterable[str]]


class AccessorGroup:
    """Immutable node of the accessor tree.

    Attribute access returns a zero-argument accessor: child accessors return
    the child group (always the same instance), leaf accessors return a new
    :class:`Provider` for their alias. Aliases are checked against the catalog
    when the group is constructed.
    """

    __slots__ = ("_children", "_entry_alias", "_facility", "_kind", "_leaves", "_path")

    def __init__(
        self,
        facility: LookupFacility,
        kind: EntryKind,
        path: str = "",
        *,
        children: Mapping[str, AccessorGroup] | None = None,
        leaves: Mapping[str, str] | None = None,
        entry_alias: str | None = None,
    ) -> None:
        """Register child groups and leaf aliases, then freeze the group.

        Args:
            facility: Lookup facility bound to the catalog store.
            kind: Entry kind resolved by every leaf of this group.
            path: Dot-separated namespace prefix, empty for a root group.
            children: Child groups keyed by attribute name.
            leaves: Leaf aliases keyed by attribute name.
            entry_alias: Alias equal to ``path`` when the group path itself is
                also a catalog entry.

        Raises:
            CatalogIntegrityError: If a binding lies outside ``path`` or an
                attribute name is bound twice.
            UnknownAliasError: If a leaf alias is missing from the catalog.
        """

        child_map = dict(children or {})
        leaf_map = dict(leaves or {})
        clashes = sorted(set(child_map) & set(leaf_map))
        if clashes:
            raise CatalogIntegrityError(f"group '{path or '<root>'}': names bound twice: {', '.join(clashes)}")
        for name, child in child_map.items():
            if child.kind is not kind or not is_within(child.path, path):
                raise CatalogIntegrityError(
                    f"group '{path or '<root>'}': child '{name}' ({child.path}) is outside its namespace",
                )
        for name, alias in leaf_map.items():
            if not is_within(alias, path):
                raise CatalogIntegrityError(
                    f"group '{path or '<root>'}': accessor '{name}' references '{alias}' outside its namespace",
                )
            facility.require(alias, kind)
        if entry_alias is not None:
            if entry_alias != path:
                raise CatalogIntegrityError(f"group '{path}': entry alias '{entry_alias}' must equal the group path")
            facility.require(entry_alias, kind)

        object.__setattr__(self, "_facility", facility)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_children", MappingProxyType(child_map))
        object.__setattr__(self, "_leaves", MappingProxyType(leaf_map))
        object.__setattr__(self, "_entry_alias", entry_alias)

    @property
    def path(self) -> str:
        """Return the namespace prefix of this group."""

        return self._path

    @property
    def kind(self) -> EntryKind:
        """Return the entry kind resolved by this group's leaves."""

        return self._kind

    @property
    def entry_alias(self) -> str | None:
        """Return the alias equal to this group's path when it is also an entry."""

        return self._entry_alias

    def child(self, name: str) -> AccessorGroup:
        """Return the child group bound to attribute ``name``.

        Raises:
            AttributeError: If no child group is bound to ``name``.
        """

        try:
            return self._children[name]
        except KeyError:
            raise self._missing(name) from None

    def leaf(self, name: str) -> Provider[Any]:
        """Return a deferred handle for the leaf bound to attribute ``name``.

        Raises:
            AttributeError: If no leaf is bound to ``name``.
        """

        try:
            alias = self._leaves[name]
        except KeyError:
            raise self._missing(name) from None
        return self._facility.resolve(alias, self._kind)

    def as_entry(self) -> Provider[Any]:
        """Return the handle for the entry whose alias equals this group's path.

        Raises:
            AttributeError: If the group path is not itself a catalog entry.
        """

        if self._entry_alias is None:
            raise AttributeError(f"group '{self._path or '<root>'}' is not itself a {self._kind.value} entry")
        return self._facility.resolve(self._entry_alias, self._kind)

    def children(self) -> Mapping[str, AccessorGroup]:
        """Return child groups keyed by attribute name."""

        return self._children

    def leaves(self) -> Mapping[str, str]:
        """Return leaf aliases keyed by attribute name."""

        return self._leaves

    def aliases(self) -> tuple[str, ...]:
        """Return every alias reachable from this group, sorted."""

        collected = set(self._leaves.values())
        if self._entry_alias is not None:
            collected.add(self._entry_alias)
        for child in self._children.values():
            collected.update(child.aliases())
        return tuple(sorted(collected))

    def __getattr__(self, name: str) -> Callable[[], Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        children = self._children
        if name in children:
            child = children[name]
            return lambda: child
        if name in self._leaves:
            return lambda: self.leaf(name)
        raise self._missing(name)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._children, *self._leaves})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind.value}, path={self._path!r})"

    def _missing(self, name: str) -> AttributeError:
        available = ", ".join(sorted({*self._children, *self._leaves})) or "<none>"
        return AttributeError(
            f"{self._kind.value} group '{self._path or '<root>'}' has no accessor '{name}' (available: {available})",
        )


class CatalogAccessors(AccessorGroup):
    """Root accessor: library namespaces plus the version, bundle and plugin roots."""

    __slots__ = ("_bundles", "_plugins", "_versions")

    def __init__(
        self,
        facility: LookupFacility,
        *,
        children: Mapping[str, AccessorGroup] | None = None,
        leaves: Mapping[str, str] | None = None,
        versions: AccessorGroup,
        bundles: AccessorGroup,
        plugins: AccessorGroup,
    ) -> None:
        super().__init__(facility, EntryKind.LIBRARY, "", children=children, leaves=leaves)
        for group, kind in ((versions, EntryKind.VERSION), (bundles, EntryKind.BUNDLE), (plugins, EntryKind.PLUGIN)):
            if group.kind is not kind or group.path:
                raise CatalogIntegrityError(f"root {kind.value} group must be a root group of kind '{kind.value}'")
        object.__setattr__(self, "_versions", versions)
        object.__setattr__(self, "_bundles", bundles)
        object.__setattr__(self, "_plugins", plugins)

    @property
    def catalog(self) -> VersionCatalog:
        """Return the catalog store backing this tree."""

        return self._facility.catalog

    @property
    def facility(self) -> LookupFacility:
        """Return the lookup facility shared by every group."""

        return self._facility

    def versions(self) -> AccessorGroup:
        """Return the root group of version accessors."""

        return self._versions

    def bundles(self) -> AccessorGroup:
        """Return the root group of bundle accessors."""

        return self._bundles

    def plugins(self) -> AccessorGroup:
        """Return the root group of plugin accessors."""

        return self._plugins

    def resolve(self, alias: str, kind: EntryKind = EntryKind.LIBRARY) -> Provider[Any]:
        """Navigate to ``alias`` under ``kind`` and return its deferred handle.

        Raises:
            AttributeError: If the tree has no accessor for ``alias``.
        """

        root: AccessorGroup = {
            EntryKind.LIBRARY: self,
            EntryKind.VERSION: self._versions,
            EntryKind.BUNDLE: self._bundles,
            EntryKind.PLUGIN: self._plugins,
        }[kind]
        group = root
        segments = alias_segments(normalize_alias(alias))
        for segment in segments[:-1]:
            group = group.child(attribute_name(segment))
        last = attribute_name(segments[-1])
        if last in group.children():
            return group.child(last).as_entry()
        return group.leaf(last)


def build_group(facility: LookupFacility, kind: EntryKind, aliases: Iterable[str], prefix: str = "") -> AccessorGroup:
    """Build the group for ``prefix`` from every alias under it, children first.

    Args:
        facility: Lookup facility injected into every group.
        kind: Entry kind of the aliases.
        aliases: Normalised aliases located under ``prefix``.
        prefix: Namespace of the group being built.

    Returns:
        AccessorGroup: Frozen group for ``prefix``.
    """

    children, leaves, entry_alias = _partition(facility, kind, aliases, prefix)
    return AccessorGroup(facility, kind, prefix, children=children, leaves=leaves, entry_alias=entry_alias)


def build_accessor_tree(
    catalog: VersionCatalog,
    declared: DeclaredAliases | None = None,
    *,
    rich_version_policy: RichVersionPolicy = EMPTY_VERSION_POLICY,
) -> CatalogAccessors:
    """Build the accessor tree for ``catalog``.

    Args:
        catalog: Catalog store to expose.
        declared: Aliases per entry kind the tree must expose. Defaults to
            every alias in the catalog; when given, each declared alias must
            exist in the catalog.
        rich_version_policy: How version accessors treat rich constraints.

    Returns:
        CatalogAccessors: Root of the immutable accessor tree.

    Raises:
        UnknownAliasError: If a declared alias is absent from the catalog.
    """

    facility = LookupFacility(catalog, rich_version_policy=rich_version_policy)
    resolved: dict[EntryKind, tuple[str, ...]] = {}
    for kind in EntryKind:
        if declared is None:
            resolved[kind] = catalog.aliases(kind)
            continue
        names = tuple(sorted({normalize_alias(alias) for alias in declared.get(kind, ())}))
        for alias in names:
            facility.require(alias, kind)
        resolved[kind] = names

    versions = build_group(facility, EntryKind.VERSION, resolved[EntryKind.VERSION])
    bundles = build_group(facility, EntryKind.BUNDLE, resolved[EntryKind.BUNDLE])
    plugins = build_group(facility, EntryKind.PLUGIN, resolved[EntryKind.PLUGIN])
    children, leaves, _ = _partition(facility, EntryKind.LIBRARY, resolved[EntryKind.LIBRARY], "")
    root = CatalogAccessors(
        facility,
        children=children,
        leaves=leaves,
        versions=versions,
        bundles=bundles,
        plugins=plugins,
    )
    LOGGER.debug(
        "built accessor tree for catalog %s: %s",
        catalog.name,
        ", ".join(f"{len(names)} {kind.value}" for kind, names in resolved.items()),
    )
    return root


def _partition(
    facility: LookupFacility,
    kind: EntryKind,
    aliases: Iterable[str],
    prefix: str,
) -> tuple[dict[str, AccessorGroup], dict[str, str], str | None]:
    """Split ``aliases`` under ``prefix`` into child groups, leaves and the prefix's own entry."""

    depth = len(alias_segments(prefix)) if prefix else 0
    nested: dict[str, list[str]] = {}
    direct: dict[str, str] = {}
    entry_alias: str | None = None
    for alias in aliases:
        if alias == prefix:
            entry_alias = alias
            continue
        segments = alias_segments(alias)
        head = segments[depth]
        if len(segments) == depth + 1:
            direct[head] = alias
        else:
            nested.setdefault(head, []).append(alias)

    children: dict[str, AccessorGroup] = {}
    for segment in sorted(nested):
        child_prefix = join_alias(prefix, segment)
        members = nested[segment]
        if segment in direct:
            members.append(direct.pop(segment))
        _bind(children, attribute_name(segment), build_group(facility, kind, members, child_prefix), prefix)
    leaves: dict[str, str] = {}
    for segment in sorted(direct):
        name = attribute_name(segment)
        if name in children:
            raise CatalogIntegrityError(f"group '{prefix or '<root>'}': names bound twice: {name}")
        _bind(leaves, name, direct[segment], prefix)
    return children, leaves, entry_alias


def _bind(table: dict[str, Any], name: str, value: Any, prefix: str) -> None:
    if name in table:
        raise CatalogIntegrityError(f"group '{prefix or '<root>'}': names bound twice: {name}")
    table[name] = value


__all__ = [
    "AccessorGroup",
    "CatalogAccessors",
    "DeclaredAliases",
    "build_accessor_tree",
    "build_group",
]
