# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for validating and normalising catalog payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import CatalogValidationError
from .types import JSONValue


def expect_string(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return ``value`` as a non-empty string or raise a catalog error.

    Args:
        value: Raw value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str: Validated string value.

    Raises:
        CatalogValidationError: If ``value`` is not a non-empty string.
    """
    if not isinstance(value, str) or not value.strip():
        raise CatalogValidationError(f"{context}: expected '{key}' to be a non-empty string")
    return value


def optional_string(value: JSONValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string with validation.

    Args:
        value: Raw value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str | None: ``value`` when present, otherwise ``None``.

    Raises:
        CatalogValidationError: If ``value`` is present but not a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise CatalogValidationError(f"{context}: expected '{key}' to be a string if present")
    return value


def optional_bool(value: JSONValue | None, *, key: str, context: str, default: bool = False) -> bool:
    """Return ``value`` coerced to ``bool`` falling back to ``default``.

    Raises:
        CatalogValidationError: If ``value`` is present but not a boolean.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise CatalogValidationError(f"{context}: expected '{key}' to be a boolean")


def string_array(value: JSONValue | None, *, key: str, context: str) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings with validation.

    Args:
        value: Raw value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        tuple[str, ...]: Tuple containing all string entries from ``value``.

    Raises:
        CatalogValidationError: If ``value`` is not a sequence of strings.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise CatalogValidationError(f"{context}: expected '{key}' to be an array of strings")
    result: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise CatalogValidationError(f"{context}: expected '{key}[{index}]' to be a string")
        result.append(item)
    return tuple(result)


def expect_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping or raise an error.

    Args:
        value: Raw value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        Mapping[str, JSONValue]: Mapping derived from ``value``.

    Raises:
        CatalogValidationError: If ``value`` is not a mapping.
    """
    if not isinstance(value, Mapping):
        raise CatalogValidationError(f"{context}: expected '{key}' to be an object")
    return value


def optional_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping, treating ``None`` as an empty table."""
    if value is None:
        return {}
    return expect_mapping(value, key=key, context=context)


__all__ = [
    "expect_mapping",
    "expect_string",
    "optional_bool",
    "optional_mapping",
    "optional_string",
    "string_array",
]
