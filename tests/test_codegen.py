# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the generated, statically typed accessor modules."""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from depcatalog.accessors.codegen import DEFAULT_ROOT_CLASS, render_accessor_module, write_accessor_module
from depcatalog.accessors.generated import GeneratedRoot
from depcatalog.catalog import CatalogBuilder, UnknownAliasError, VersionCatalog


def _import_module(path: Path, name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def accessors_module(tmp_path: Path, catalog: VersionCatalog) -> ModuleType:
    path = write_accessor_module(catalog, tmp_path / "generated" / "libs_accessors.py")
    return _import_module(path, "libs_accessors")


def test_render_emits_one_class_per_group(catalog: VersionCatalog) -> None:
    source = render_accessor_module(catalog)

    assert f"class {DEFAULT_ROOT_CLASS}(GeneratedRoot):" in source
    assert "class KtorServerLibraryAccessors(GeneratedGroup):" in source
    assert "def html(self) -> KtorServerHtmlLibraryAccessors:" in source
    assert "class KotlinPluginAccessors(GeneratedGroup):" in source
    assert f"CATALOG_CHECKSUM: Final[str] = {catalog.checksum!r}" in source
    # children are defined before the classes that reference them
    assert source.index("class KtorServerHtmlLibraryAccessors") < source.index("class KtorServerLibraryAccessors")
    compile(source, "libs_accessors.py", "exec")


def test_generated_tree_resolves_catalog_entries(accessors_module: ModuleType, catalog: VersionCatalog) -> None:
    libs = accessors_module.create(catalog)

    assert isinstance(libs, GeneratedRoot)
    assert libs.catalog is catalog
    assert libs.kotlinx().coroutines().debug().get().coordinate == (
        "org.jetbrains.kotlinx:kotlinx-coroutines-debug:1.9.0"
    )
    assert libs.versions().ktor().get() == "3.0.2"
    assert libs.plugins().kotlin().serialization().get().id == "org.jetbrains.kotlin.plugin.serialization"
    assert [member.name for member in libs.bundles().ktor().server().get()] == [
        "ktor-server-core",
        "ktor-server-netty",
    ]
    assert libs.kotlinx() is libs.kotlinx()


def test_generated_tree_is_immutable(accessors_module: ModuleType, catalog: VersionCatalog) -> None:
    libs = accessors_module.create(catalog)

    with pytest.raises(AttributeError, match="immutable"):
        libs.kotlinx = None


def test_stale_module_fails_on_construction(accessors_module: ModuleType, catalog_mapping: dict[str, Any]) -> None:
    """A catalog missing an alias the module declares is rejected eagerly."""

    del catalog_mapping["libraries"]["kotlinx-coroutines-debug"]
    stale = CatalogBuilder.from_mapping(catalog_mapping).build()

    with pytest.raises(UnknownAliasError) as excinfo:
        accessors_module.create(stale)
    assert excinfo.value.alias == "kotlinx.coroutines.debug"


def test_checksum_mismatch_is_logged(
    accessors_module: ModuleType,
    catalog_mapping: dict[str, Any],
    caplog: pytest.LogCaptureFixture,
) -> None:
    catalog_mapping["libraries"]["ktor-server-auth"] = {"module": "io.ktor:ktor-server-auth", "version": {"ref": "ktor"}}
    newer = CatalogBuilder.from_mapping(catalog_mapping).build()

    with caplog.at_level(logging.WARNING, logger="depcatalog.accessors.generated"):
        libs = accessors_module.create(newer)

    assert "regenerate" in caplog.text
    assert libs.ktor().server().core().get().name == "ktor-server-core"


def test_namespace_alias_is_exposed_as_entry(tmp_path: Path) -> None:
    catalog = (
        CatalogBuilder(name="tools")
        .version("ktor", "3.0.2")
        .library("ktor-server", "io.ktor", "ktor-server", version_ref="ktor")
        .library("ktor-server-core", "io.ktor", "ktor-server-core", version_ref="ktor")
        .build()
    )
    path = write_accessor_module(catalog, tmp_path / "tools_accessors.py", class_name="LibrariesForTools")
    module = _import_module(path, "tools_accessors")

    tools = module.LibrariesForTools.from_catalog(catalog)

    assert module.CATALOG_NAME == "tools"
    assert tools.ktor().server().as_entry().get().coordinate == "io.ktor:ktor-server:3.0.2"
    assert tools.ktor().server().core().get().name == "ktor-server-core"
    with pytest.raises(AttributeError, match="not itself"):
        tools.ktor().as_entry()


@pytest.mark.parametrize("name", ["my\nlibs", 'a"""b', "back\\slash", "quote'\"mix", "tab\there"])
def test_render_escapes_catalog_names(name: str) -> None:
    catalog = CatalogBuilder(name=name).version("ktor", "3.0.2").library("mockk", "io.mockk", "mockk").build()

    source = render_accessor_module(catalog)

    compile(source, "escaped_accessors.py", "exec")
    assert source.splitlines()[0].startswith("# Generated by depcatalog from catalog")


def test_hostile_name_module_still_imports(tmp_path: Path) -> None:
    catalog = CatalogBuilder(name='x"""\nimport os').library("mockk", "io.mockk", "mockk").build()
    module = _import_module(write_accessor_module(catalog, tmp_path / "hostile.py"), "hostile_accessors")

    assert module.CATALOG_NAME == 'x"""\nimport os'
    assert not hasattr(module, "os")


def test_leaf_accessors_are_documented(accessors_module: ModuleType) -> None:
    root = accessors_module.LibrariesForLibs
    debug = accessors_module.KotlinxCoroutinesLibraryAccessors.debug
    version = accessors_module.VersionAccessors.coroutines
    bundle = accessors_module.KtorBundleAccessors.server
    plugin = accessors_module.KotlinPluginAccessors.jvm

    assert debug.__doc__ == (
        "Return the provider for kotlinx.coroutines.debug "
        "(org.jetbrains.kotlinx:kotlinx-coroutines-debug) with version ref 'coroutines'."
    )
    assert version.__doc__.startswith("Return version coroutines (1.9.0);")
    assert bundle.__doc__ == "Return the libraries of bundle ktor.server: ktor.server.core, ktor.server.netty."
    assert plugin.__doc__ == (
        "Return the provider for plugin kotlin.jvm (org.jetbrains.kotlin.jvm) with version ref 'kotlin'."
    )
    assert root.mockk.__doc__ == "Return the provider for mockk (io.mockk:mockk) with version ref 'mockk'."


def test_rich_constraint_appears_in_docstring() -> None:
    catalog = CatalogBuilder().library("detekt", "io.gitlab", "detekt", version={"strictly": "[1.0,2.0)"}).build()

    source = render_accessor_module(catalog)

    assert '"""Return the provider for detekt (io.gitlab:detekt) with version {strictly [1.0,2.0)}."""' in source
