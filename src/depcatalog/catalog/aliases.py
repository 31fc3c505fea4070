# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Alias normalisation and namespace helpers."""

from __future__ import annotations

import re
from typing import Final

from .errors import CatalogValidationError

ALIAS_SEPARATOR: Final[str] = "."
_SEPARATOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"[-_.]")
_SEGMENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-z][a-zA-Z0-9]*")

ROOT_GROUP_NAMES: Final[frozenset[str]] = frozenset({"bundles", "versions", "plugins"})
RESERVED_LIBRARY_PREFIXES: Final[frozenset[str]] = ROOT_GROUP_NAMES | frozenset(
    {"extensions", "class", "convention"},
)


def normalize_alias(raw: str, *, context: str = "alias") -> str:
    """Return ``raw`` with every separator rewritten to ``.``.

    Args:
        raw: Alias as declared by the caller; ``-``, ``_`` and ``.`` all
            act as segment separators.
        context: Prefix used in error messages.

    Returns:
        str: Dot-separated alias.

    Raises:
        CatalogValidationError: If the alias is empty or a segment is malformed.
    """

    if not isinstance(raw, str) or not raw:
        raise CatalogValidationError(f"{context}: alias must be a non-empty string")
    segments = _SEPARATOR_PATTERN.split(raw)
    for segment in segments:
        if not _SEGMENT_PATTERN.fullmatch(segment):
            raise CatalogValidationError(
                f"{context}: invalid alias '{raw}'; segments must match "
                f"'{_SEGMENT_PATTERN.pattern}'",
            )
    return ALIAS_SEPARATOR.join(segments)


def alias_segments(alias: str) -> tuple[str, ...]:
    """Split a normalised ``alias`` into its segments."""

    return tuple(alias.split(ALIAS_SEPARATOR))


def join_alias(*segments: str) -> str:
    """Join ``segments`` into a dot-separated alias, skipping empty parts."""

    return ALIAS_SEPARATOR.join(segment for segment in segments if segment)


def is_within(alias: str, prefix: str) -> bool:
    """Return ``True`` when ``alias`` lives inside the ``prefix`` namespace.

    The empty prefix denotes the root namespace and contains every alias.
    """

    if not prefix:
        return True
    return alias.startswith(prefix + ALIAS_SEPARATOR)


def check_library_alias(alias: str, *, context: str) -> str:
    """Reject library aliases whose first segment is reserved.

    Raises:
        CatalogValidationError: If ``alias`` starts with a reserved segment.
    """

    head = alias_segments(alias)[0]
    if head in RESERVED_LIBRARY_PREFIXES:
        reserved = ", ".join(sorted(RESERVED_LIBRARY_PREFIXES))
        raise CatalogValidationError(
            f"{context}: library alias '{alias}' may not start with a reserved name ({reserved})",
        )
    return alias


__all__ = [
    "ALIAS_SEPARATOR",
    "RESERVED_LIBRARY_PREFIXES",
    "ROOT_GROUP_NAMES",
    "alias_segments",
    "check_library_alias",
    "is_within",
    "join_alias",
    "normalize_alias",
]
