# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render a typed accessor module for a catalog.

The emitted module mirrors the accessor tree as one class per group, built
leaf groups first so that every parent only references classes defined
above it. Each class lists the aliases it exposes; constructing the module's
root against a catalog that lacks one of them raises
:class:`~depcatalog.catalog.errors.UnknownAliasError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..catalog.aliases import alias_segments
from ..catalog.model_catalog import VersionCatalog
from ..catalog.model_entries import CoordinateEntry, Dependency, EntryKind, Plugin, VersionEntry
from ..catalog.model_versions import VersionConstraint
from .naming import class_name as group_class_name
from .tree import AccessorGroup, build_accessor_tree

LOGGER = logging.getLogger(__name__)

DEFAULT_ROOT_CLASS: Final[str] = "LibrariesForLibs"
INDENT: Final[str] = "    "

_CLASS_SUFFIX: Final[dict[EntryKind, str]] = {
    EntryKind.LIBRARY: "LibraryAccessors",
    EntryKind.VERSION: "VersionAccessors",
    EntryKind.BUNDLE: "BundleAccessors",
    EntryKind.PLUGIN: "PluginAccessors",
}
_RETURN_TYPE: Final[dict[EntryKind, str]] = {
    EntryKind.LIBRARY: "Provider[Dependency]",
    EntryKind.VERSION: "Provider[str]",
    EntryKind.BUNDLE: "Provider[tuple[Dependency, ...]]",
    EntryKind.PLUGIN: "Provider[Plugin]",
}
_RESOLVER: Final[dict[EntryKind, str]] = {
    EntryKind.LIBRARY: "resolve_dependency",
    EntryKind.VERSION: "resolve_version",
    EntryKind.BUNDLE: "resolve_bundle",
    EntryKind.PLUGIN: "resolve_plugin",
}
_ROOT_GROUPS: Final[tuple[str, ...]] = ("versions", "bundles", "plugins")


@dataclass(slots=True)
class _ClassNames:
    """Allocate unique class names for groups."""

    taken: set[str] = field(default_factory=set)

    def allocate(self, group: AccessorGroup) -> str:
        segments = alias_segments(group.path) if group.path else ()
        base = group_class_name(segments, suffix=_CLASS_SUFFIX[group.kind])
        candidate = base
        index = 2
        while candidate in self.taken:
            candidate = f"{base}{index}"
            index += 1
        self.taken.add(candidate)
        return candidate


def render_accessor_module(catalog: VersionCatalog, *, class_name: str = DEFAULT_ROOT_CLASS) -> str:
    """Return Python source for a typed accessor module over ``catalog``.

    Args:
        catalog: Catalog whose aliases the module exposes.
        class_name: Name of the generated root class.

    Returns:
        str: Module source code.
    """

    tree = build_accessor_tree(catalog)
    names = _ClassNames(taken={class_name})
    lines: list[str] = [
        f"# Generated by depcatalog from catalog '{_doc_text(catalog.name)}'. Do not edit.",
        f'"""Typed accessors for the \'{_doc_text(catalog.name)}\' version catalog."""',
        "",
        "from __future__ import annotations",
        "",
        "from typing import Final",
        "",
        "from depcatalog.accessors.facility import LookupFacility, RichVersionPolicy",
        "from depcatalog.accessors.generated import GeneratedGroup, GeneratedRoot",
        "from depcatalog.accessors.provider import Provider",
        "from depcatalog.catalog import Dependency, EntryKind, Plugin, VersionCatalog",
        "",
        f"CATALOG_NAME: Final[str] = {catalog.name!r}",
        f"CATALOG_CHECKSUM: Final[str] = {catalog.checksum!r}",
        "",
    ]

    root_children: list[tuple[str, str]] = []
    for attribute, group in tree.children().items():
        root_children.append((attribute, _emit_group(group, catalog, names, lines)))
    for attribute in _ROOT_GROUPS:
        root_group: AccessorGroup = getattr(tree, attribute)()
        root_children.append((attribute, _emit_group(root_group, catalog, names, lines)))

    lines.extend(_class_lines(tree, class_name, catalog, base="GeneratedRoot", children=root_children, root=True))
    lines.extend(
        [
            "",
            "",
            "def create(",
            f"{INDENT}catalog: VersionCatalog,",
            f"{INDENT}*,",
            f"{INDENT}rich_version_policy: RichVersionPolicy = \"empty\",",
            f") -> {class_name}:",
            f'{INDENT}"""Return the ``{class_name}`` accessor tree bound to ``catalog``."""',
            "",
            f"{INDENT}return {class_name}.from_catalog(catalog, rich_version_policy=rich_version_policy)",
            "",
            "",
            f'__all__ = ["CATALOG_CHECKSUM", "CATALOG_NAME", "{class_name}", "create"]',
            "",
        ],
    )
    LOGGER.debug("rendered accessor module %s for catalog %s", class_name, catalog.name)
    return "\n".join(lines)


def write_accessor_module(
    catalog: VersionCatalog,
    path: Path,
    *,
    class_name: str = DEFAULT_ROOT_CLASS,
) -> Path:
    """Render the accessor module for ``catalog`` and write it to ``path``.

    Returns:
        Path: The path written.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_accessor_module(catalog, class_name=class_name), encoding="utf-8")
    return path


def _emit_group(group: AccessorGroup, catalog: VersionCatalog, names: _ClassNames, lines: list[str]) -> str:
    """Emit ``group`` and its descendants, children first; return its class name."""

    children = [
        (attribute, _emit_group(child, catalog, names, lines)) for attribute, child in group.children().items()
    ]
    name = names.allocate(group)
    lines.extend(_class_lines(group, name, catalog, base="GeneratedGroup", children=children))
    return name


def _doc_text(value: str) -> str:
    """Return ``value`` escaped for a generated comment or docstring."""

    return value.encode("unicode_escape").decode("ascii").replace('"', '\\"')


def _version_suffix(version: VersionConstraint, version_ref: str | None) -> str:
    if version_ref is not None:
        return f" with version ref '{version_ref}'"
    if version.is_empty:
        return ""
    return f" with version {version.display_name}"


def _leaf_doc(entry: CoordinateEntry) -> str:
    """Return the one-line docstring describing the accessor for ``entry``."""

    if isinstance(entry, Dependency):
        suffix = _version_suffix(entry.version, entry.version_ref)
        text = f"Return the provider for {entry.alias} ({entry.module}){suffix}."
    elif isinstance(entry, Plugin):
        suffix = _version_suffix(entry.version, entry.version_ref)
        text = f"Return the provider for plugin {entry.alias} ({entry.id}){suffix}."
    elif isinstance(entry, VersionEntry):
        text = (
            f"Return version {entry.alias} ({entry.constraint.display_name}); "
            "rich constraints follow the tree's rich version policy."
        )
    else:
        members = ", ".join(member.alias for member in entry.members)
        text = f"Return the libraries of bundle {entry.alias}: {members}."
    return _doc_text(text)


def _class_lines(
    group: AccessorGroup,
    name: str,
    catalog: VersionCatalog,
    *,
    base: str,
    children: list[tuple[str, str]],
    root: bool = False,
) -> Iterator[str]:
    kind = group.kind
    yield ""
    yield ""
    yield f"class {name}({base}):"
    if group.path:
        yield f'{INDENT}"""Accessors for {kind.value} aliases under ``{group.path}``."""'
    elif root:
        yield f'{INDENT}"""Root accessors for the ``{_doc_text(catalog.name)}`` catalog."""'
    else:
        yield f'{INDENT}"""Root {kind.value} accessors."""'
    yield ""
    slots = ", ".join(f'"_{attribute}"' for attribute, _ in children)
    yield f"{INDENT}__slots__ = ({slots}{',' if len(children) == 1 else ''})"
    yield ""
    yield f"{INDENT}KIND = EntryKind.{kind.name}"
    yield f"{INDENT}PATH = {group.path!r}"
    declared = tuple(group.leaves().values())
    yield f"{INDENT}DECLARED = {declared!r}"
    if group.entry_alias is not None:
        yield f"{INDENT}ENTRY_ALIAS = {group.entry_alias!r}"
    if root:
        yield f"{INDENT}CATALOG_NAME = CATALOG_NAME"
        yield f"{INDENT}CATALOG_CHECKSUM = CATALOG_CHECKSUM"

    if children:
        yield ""
        yield f"{INDENT}def __init__(self, facility: LookupFacility) -> None:"
        yield f"{INDENT * 2}super().__init__("
        yield f"{INDENT * 3}facility,"
        for attribute, child_class in children:
            yield f"{INDENT * 3}_{attribute}={child_class}(facility),"
        yield f"{INDENT * 2})"

    for attribute, alias in group.leaves().items():
        yield ""
        yield f"{INDENT}def {attribute}(self) -> {_RETURN_TYPE[kind]}:"
        yield f'{INDENT * 2}"""{_leaf_doc(catalog.lookup(alias, kind))}"""'
        yield ""
        yield f"{INDENT * 2}return self._facility.{_RESOLVER[kind]}({alias!r})"

    for attribute, child_class in children:
        yield ""
        yield f"{INDENT}def {attribute}(self) -> {child_class}:"
        yield f"{INDENT * 2}return self._{attribute}"


__all__ = ["DEFAULT_ROOT_CLASS", "render_accessor_module", "write_accessor_module"]
