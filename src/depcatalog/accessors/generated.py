# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Base classes for accessor modules emitted by :mod:`depcatalog.accessors.codegen`."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, TypeVar

from ..catalog.aliases import is_within
from ..catalog.errors import CatalogIntegrityError
from ..catalog.model_catalog import VersionCatalog
from ..catalog.model_entries import EntryKind
from .facility import EMPTY_VERSION_POLICY, LookupFacility, RichVersionPolicy
from .provider import Provider

LOGGER = logging.getLogger(__name__)

RootT = TypeVar("RootT", bound="GeneratedRoot")


class GeneratedGroup:
    """Statically generated accessor group.

    Subclasses declare ``KIND``, ``PATH`` and the ``DECLARED`` aliases they
    expose. Child groups are constructed by the subclass before calling
    ``super().__init__`` and passed as keyword arguments, which are stored
    once; the instance is immutable afterwards.
    """

    __slots__ = ("_facility",)

    KIND: ClassVar[EntryKind] = EntryKind.LIBRARY
    PATH: ClassVar[str] = ""
    DECLARED: ClassVar[tuple[str, ...]] = ()
    ENTRY_ALIAS: ClassVar[str | None] = None

    def __init__(self, facility: LookupFacility, **children: GeneratedGroup) -> None:
        """Verify the declared aliases against the catalog and store ``children``.

        Raises:
            CatalogIntegrityError: If a declared alias lies outside ``PATH``.
            UnknownAliasError: If a declared alias is missing from the catalog,
                meaning the generated module is out of date.
        """

        declared = self.DECLARED if self.ENTRY_ALIAS is None else (*self.DECLARED, self.ENTRY_ALIAS)
        for alias in declared:
            if alias != self.ENTRY_ALIAS and not is_within(alias, self.PATH):
                raise CatalogIntegrityError(
                    f"{type(self).__name__}: alias '{alias}' is outside namespace '{self.PATH or '<root>'}'",
                )
            facility.require(alias, self.KIND)
        object.__setattr__(self, "_facility", facility)
        for name, child in children.items():
            object.__setattr__(self, name, child)

    def as_entry(self) -> Provider[Any]:
        """Return the handle for the entry whose alias equals ``PATH``.

        Raises:
            AttributeError: If this group's path is not itself an entry.
        """

        if self.ENTRY_ALIAS is None:
            raise AttributeError(f"group '{self.PATH or '<root>'}' is not itself a {self.KIND.value} entry")
        return self._facility.resolve(self.ENTRY_ALIAS, self.KIND)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.PATH!r})"


class GeneratedRoot(GeneratedGroup):
    """Root of a generated accessor module."""

    __slots__ = ()

    CATALOG_NAME: ClassVar[str] = ""
    CATALOG_CHECKSUM: ClassVar[str] = ""

    @classmethod
    def from_catalog(
        cls: type[RootT],
        catalog: VersionCatalog,
        *,
        rich_version_policy: RichVersionPolicy = EMPTY_VERSION_POLICY,
    ) -> RootT:
        """Construct the generated tree over ``catalog``.

        A checksum mismatch is logged; missing aliases raise during construction.
        """

        if cls.CATALOG_CHECKSUM and catalog.checksum != cls.CATALOG_CHECKSUM:
            LOGGER.warning(
                "%s was generated from a different revision of catalog %s; regenerate it",
                cls.__name__,
                catalog.name,
            )
        return cls(LookupFacility(catalog, rich_version_policy=rich_version_policy))

    @property
    def catalog(self) -> VersionCatalog:
        """Return the catalog store backing this tree."""

        return self._facility.catalog


__all__ = ["GeneratedGroup", "GeneratedRoot"]
