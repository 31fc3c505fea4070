# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by version catalog operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model_entries import EntryKind


class CatalogError(RuntimeError):
    """Base class for every error raised by the catalog package."""


class CatalogValidationError(CatalogError):
    """Raised when catalog input fails structural validation."""


class CatalogIntegrityError(CatalogError):
    """Raised when catalog metadata violates semantic invariants."""


class UnknownAliasError(CatalogIntegrityError, KeyError):
    """Raised when an alias is not present in the catalog store."""

    def __init__(self, alias: str, kind: EntryKind, *, catalog: str) -> None:
        """Record the missing ``alias`` together with its entry ``kind``.

        Args:
            alias: Alias that could not be resolved.
            kind: Entry kind the alias was looked up under.
            catalog: Name of the catalog consulted.
        """

        self.alias = alias
        self.kind = kind
        self.catalog = catalog
        super().__init__(f"{catalog}: unknown {kind.value} alias '{alias}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class RichVersionError(CatalogIntegrityError):
    """Raised when a rich version constraint cannot be rendered as one string."""


__all__ = (
    "CatalogError",
    "CatalogIntegrityError",
    "CatalogValidationError",
    "RichVersionError",
    "UnknownAliasError",
)
