# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for deferred providers and the lookup facility."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from depcatalog.accessors.facility import LookupFacility
from depcatalog.accessors.provider import Provider
from depcatalog.catalog import (
    CatalogBuilder,
    Dependency,
    EntryKind,
    RichVersionError,
    UnknownAliasError,
    VersionCatalog,
    VersionConstraint,
)


def test_provider_defers_and_caches() -> None:
    calls: list[int] = []

    def compute() -> int:
        calls.append(1)
        return 42

    provider = Provider(compute, description="answer")

    assert not provider.is_resolved
    assert repr(provider) == "Provider(answer)"
    assert provider.get() == 42
    assert provider.get() == 42
    assert calls == [1]
    assert provider.is_resolved
    assert repr(provider) == "Provider(answer = 42)"


def test_provider_failures_are_not_cached() -> None:
    attempts: list[int] = []

    def compute() -> str:
        attempts.append(1)
        raise UnknownAliasError("gone", EntryKind.LIBRARY, catalog="libs")

    provider = Provider(compute, description="library 'gone'")

    with pytest.raises(UnknownAliasError):
        provider.get()
    assert provider.get_or_none() is None
    assert provider.get_or_else("fallback") == "fallback"
    assert not provider.is_present()
    assert len(attempts) == 4


def test_provider_of_and_map() -> None:
    provider = Provider.of("3.0.2")
    mapped = provider.map(lambda version: version.split("."))

    assert provider.is_resolved
    assert not mapped.is_resolved
    assert mapped.get() == ["3", "0", "2"]
    assert mapped.description == "map('3.0.2')"


def test_concurrent_forcing_computes_once() -> None:
    calls: list[int] = []

    def compute() -> object:
        calls.append(1)
        return object()

    provider = Provider(compute, description="shared")
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: provider.get(), range(32)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)


def test_facility_resolution_is_lazy(catalog: VersionCatalog) -> None:
    """Unknown aliases only fail when the handle is forced."""

    facility = LookupFacility(catalog)
    handle = facility.resolve_dependency("kotlinx.coroutines.core")

    with pytest.raises(UnknownAliasError, match="kotlinx.coroutines.core"):
        handle.get()


def test_facility_resolves_each_kind(catalog: VersionCatalog) -> None:
    facility = LookupFacility(catalog)

    dependency = facility.resolve("kotlin.logging", EntryKind.LIBRARY).get()
    assert isinstance(dependency, Dependency)
    assert dependency.coordinate == "io.github.oshai:kotlin-logging-jvm:7.0.3"
    assert facility.resolve("ktor", EntryKind.VERSION).get() == "3.0.2"
    assert facility.resolve("kotlin.jvm", EntryKind.PLUGIN).get().id == "org.jetbrains.kotlin.jvm"
    members = facility.resolve("ktor.server", EntryKind.BUNDLE).get()
    assert tuple(member.alias for member in members) == ("ktor.server.core", "ktor.server.netty")
    assert facility.require("mockk", EntryKind.VERSION) == "mockk"


def test_rich_version_policies() -> None:
    catalog = CatalogBuilder().version("range", {"strictly": "[1.0,2.0)", "prefer": "1.5"}).build()

    assert LookupFacility(catalog).resolve_version("range").get() == ""
    assert LookupFacility(catalog).resolve_version_constraint("range").get() == VersionConstraint(
        strictly="[1.0,2.0)",
        prefer="1.5",
    )
    with pytest.raises(RichVersionError, match=r"strictly \[1.0,2.0\)"):
        LookupFacility(catalog, rich_version_policy="error").resolve_version("range").get()


def test_unknown_policy_is_rejected(catalog: VersionCatalog) -> None:
    with pytest.raises(ValueError, match="rich version policy"):
        LookupFacility(catalog, rich_version_policy="loud")  # type: ignore[arg-type]
