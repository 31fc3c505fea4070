# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Version constraint models shared by catalog entries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from .errors import CatalogValidationError
from .types import JSONValue
from .utils import optional_bool, optional_string, string_array

_RANGE_MARKERS: Final[tuple[str, ...]] = ("[", "]", "(", ")", ",")
_DYNAMIC_PREFIX: Final[str] = "latest."
_DYNAMIC_SUFFIX: Final[str] = "+"


def is_range_or_dynamic(version: str) -> bool:
    """Return ``True`` when ``version`` is a range or dynamic selector.

    Args:
        version: Version expression such as ``"1.2"``, ``"[1.0,2.0)"`` or ``"1.+"``.

    Returns:
        bool: ``True`` when the expression matches more than one version.
    """

    if any(marker in version for marker in _RANGE_MARKERS):
        return True
    return version.endswith(_DYNAMIC_SUFFIX) or version.startswith(_DYNAMIC_PREFIX)


@dataclass(frozen=True, slots=True)
class VersionConstraint:
    """Rich version constraint attached to catalog versions, libraries and plugins."""

    require: str | None = None
    strictly: str | None = None
    prefer: str | None = None
    reject: tuple[str, ...] = ()
    reject_all: bool = False

    @classmethod
    def exact(cls, version: str) -> VersionConstraint:
        """Return a constraint requiring the literal ``version``."""

        return cls(require=version)

    @classmethod
    def from_value(cls, value: JSONValue | VersionConstraint, *, context: str) -> VersionConstraint:
        """Create a constraint from a string shorthand or a rich mapping.

        Args:
            value: Either a version string (treated as ``require``), an existing
                constraint, or a mapping with ``require``/``strictly``/``prefer``/
                ``reject``/``rejectAll`` keys.
            context: Human-readable context used in error messages.

        Returns:
            VersionConstraint: Immutable constraint instance.

        Raises:
            CatalogValidationError: If ``value`` has an unsupported shape.
        """

        if isinstance(value, VersionConstraint):
            return value
        if isinstance(value, str):
            if not value.strip():
                raise CatalogValidationError(f"{context}: version must not be empty")
            return cls.exact(value)
        if not isinstance(value, Mapping):
            raise CatalogValidationError(f"{context}: expected a version string or object")
        unknown = set(value) - {"require", "strictly", "prefer", "reject", "rejectAll"}
        if unknown:
            raise CatalogValidationError(
                f"{context}: unsupported version keys {', '.join(sorted(unknown))}",
            )
        constraint = cls(
            require=optional_string(value.get("require"), key="require", context=context),
            strictly=optional_string(value.get("strictly"), key="strictly", context=context),
            prefer=optional_string(value.get("prefer"), key="prefer", context=context),
            reject=string_array(value.get("reject"), key="reject", context=context),
            reject_all=optional_bool(value.get("rejectAll"), key="rejectAll", context=context),
        )
        if constraint.is_empty:
            raise CatalogValidationError(f"{context}: version object declares no constraint")
        return constraint

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when no constraint component is set."""

        return not (self.require or self.strictly or self.prefer or self.reject or self.reject_all)

    @property
    def is_rich(self) -> bool:
        """Return ``True`` when the constraint cannot be written as one literal."""

        return self.single_version() is None

    def single_version(self) -> str | None:
        """Return the single version string this constraint denotes, if any.

        Returns:
            str | None: The literal version, or ``None`` for ranges, dynamic
            selectors, rejections, preference-only or conflicting constraints.
        """

        if self.reject or self.reject_all:
            return None
        if self.strictly and self.require and self.strictly != self.require:
            return None
        version = self.strictly or self.require
        if not version:
            return None
        if self.prefer and self.prefer != version:
            return None
        if is_range_or_dynamic(version):
            return None
        return version

    @property
    def display_name(self) -> str:
        """Return a human readable rendering of the constraint."""

        single = self.single_version()
        if single is not None:
            return single
        if self.is_empty:
            return ""
        parts: list[str] = []
        if self.strictly:
            parts.append(f"strictly {self.strictly}")
        if self.require:
            parts.append(f"require {self.require}")
        if self.prefer:
            parts.append(f"prefer {self.prefer}")
        if self.reject_all:
            parts.append("reject all versions")
        elif self.reject:
            parts.append(f"reject {' & '.join(self.reject)}")
        return "{" + "; ".join(parts) + "}"

    def to_dict(self) -> JSONValue:
        """Return the snapshot representation, collapsing plain literals to strings."""

        if self.require and not (self.strictly or self.prefer or self.reject or self.reject_all):
            return self.require
        payload: dict[str, JSONValue] = {}
        if self.require:
            payload["require"] = self.require
        if self.strictly:
            payload["strictly"] = self.strictly
        if self.prefer:
            payload["prefer"] = self.prefer
        if self.reject:
            payload["reject"] = list(self.reject)
        if self.reject_all:
            payload["rejectAll"] = True
        return payload

    def __str__(self) -> str:
        return self.display_name


NO_VERSION: Final[VersionConstraint] = VersionConstraint()

__all__ = [
    "NO_VERSION",
    "VersionConstraint",
    "is_range_or_dynamic",
]
