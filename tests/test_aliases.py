# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for alias normalisation and namespace helpers."""

from __future__ import annotations

import pytest

from depcatalog.accessors.naming import attribute_name, class_name
from depcatalog.catalog.aliases import (
    alias_segments,
    check_library_alias,
    is_within,
    join_alias,
    normalize_alias,
)
from depcatalog.catalog.errors import CatalogValidationError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("kotlinx-coroutines-debug", "kotlinx.coroutines.debug"),
        ("kotlinx_coroutines.debug", "kotlinx.coroutines.debug"),
        ("ktor.server.htmlBuilder", "ktor.server.htmlBuilder"),
        ("mockk", "mockk"),
    ],
)
def test_normalize_alias_rewrites_separators(raw: str, expected: str) -> None:
    """Every separator flavour collapses onto dots."""

    assert normalize_alias(raw) == expected


@pytest.mark.parametrize("raw", ["", "Kotlin", "1ktor", "ktor..server", "ktor.", "-ktor", "ktor server"])
def test_normalize_alias_rejects_malformed_aliases(raw: str) -> None:
    """Empty segments, upper-case or digit-led segments are rejected."""

    with pytest.raises(CatalogValidationError):
        normalize_alias(raw, context="test")


def test_segments_and_join_are_inverse() -> None:
    """Joining the segments of an alias yields the alias again."""

    alias = "ktor.server.test.host"
    assert alias_segments(alias) == ("ktor", "server", "test", "host")
    assert join_alias(*alias_segments(alias)) == alias
    assert join_alias("", "ktor") == "ktor"


def test_is_within_requires_strict_prefix() -> None:
    """Namespace membership is a strict prefix followed by a separator."""

    assert is_within("ktor.server.core", "ktor.server")
    assert is_within("ktor.server.core", "")
    assert not is_within("ktor.server", "ktor.server")
    assert not is_within("ktor.serverless", "ktor.server")


@pytest.mark.parametrize("alias", ["versions.ktor", "bundles.all", "plugins.kotlin", "class.path"])
def test_library_aliases_may_not_start_with_reserved_names(alias: str) -> None:
    """Library aliases cannot shadow the root groups."""

    with pytest.raises(CatalogValidationError, match="reserved"):
        check_library_alias(alias, context="libs.libraries")


def test_attribute_names_are_valid_identifiers() -> None:
    """Segments map onto snake_case names that never clash with keywords or the group API."""

    assert attribute_name("htmlBuilder") == "html_builder"
    assert attribute_name("core") == "core"
    assert attribute_name("import") == "import_"
    assert attribute_name("match") == "match_"
    assert attribute_name("children") == "children_"
    assert attribute_name("versions") == "versions_"


def test_class_name_concatenates_segments() -> None:
    """Group class names are CamelCase segments followed by the kind suffix."""

    assert class_name(("ktor", "server"), suffix="LibraryAccessors") == "KtorServerLibraryAccessors"
    assert class_name((), suffix="VersionAccessors") == "VersionAccessors"
