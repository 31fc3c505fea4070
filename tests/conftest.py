# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from depcatalog.catalog import CatalogBuilder, VersionCatalog


def _library(group: str, name: str, ref: str) -> dict[str, Any]:
    return {"group": group, "name": name, "version": {"ref": ref}}


@pytest.fixture
def catalog_mapping() -> dict[str, Any]:
    """Return a snapshot mapping modelled on a Ktor/Kotlin project catalog."""

    return {
        "schemaVersion": "1.0.0",
        "name": "libs",
        "versions": {
            "coroutines": "1.9.0",
            "dokka": "1.9.20",
            "jreleaser": "1.14.0",
            "kotlin": "2.1.0",
            "ktor": "3.0.2",
            "logging": "7.0.3",
            "mockk": "1.13.13",
            "serialization": "1.7.3",
        },
        "libraries": {
            "kotlin-logging": _library("io.github.oshai", "kotlin-logging-jvm", "logging"),
            "kotlin-test": _library("org.jetbrains.kotlin", "kotlin-test", "kotlin"),
            "kotlinx-coroutines-debug": _library("org.jetbrains.kotlinx", "kotlinx-coroutines-debug", "coroutines"),
            "kotlinx-coroutines-test": _library("org.jetbrains.kotlinx", "kotlinx-coroutines-test", "coroutines"),
            "kotlinx-serialization-json": _library(
                "org.jetbrains.kotlinx",
                "kotlinx-serialization-json",
                "serialization",
            ),
            "ktor-client-apache": _library("io.ktor", "ktor-client-apache", "ktor"),
            "ktor-client-cio": _library("io.ktor", "ktor-client-cio", "ktor"),
            "ktor-client-sse": _library("io.ktor", "ktor-client-sse", "ktor"),
            "ktor-server-cio": _library("io.ktor", "ktor-server-cio", "ktor"),
            "ktor-server-core": _library("io.ktor", "ktor-server-core", "ktor"),
            "ktor-server-netty": _library("io.ktor", "ktor-server-netty", "ktor"),
            "ktor-server-sse": _library("io.ktor", "ktor-server-sse", "ktor"),
            "ktor-server-websockets": _library("io.ktor", "ktor-server-websockets", "ktor"),
            "ktor-server-html-builder": _library("io.ktor", "ktor-server-html-builder", "ktor"),
            "ktor-server-test-host": _library("io.ktor", "ktor-server-test-host", "ktor"),
            "mockk": _library("io.mockk", "mockk", "mockk"),
        },
        "bundles": {
            "ktor-server": ["ktor-server-core", "ktor-server-netty"],
        },
        "plugins": {
            "dokka": {"id": "org.jetbrains.dokka", "version": {"ref": "dokka"}},
            "jreleaser": {"id": "org.jreleaser", "version": {"ref": "jreleaser"}},
            "kotlin-jvm": {"id": "org.jetbrains.kotlin.jvm", "version": {"ref": "kotlin"}},
            "kotlin-serialization": {
                "id": "org.jetbrains.kotlin.plugin.serialization",
                "version": {"ref": "kotlin"},
            },
        },
    }


@pytest.fixture
def catalog(catalog_mapping: dict[str, Any]) -> VersionCatalog:
    """Return the catalog store built from :func:`catalog_mapping`."""

    return CatalogBuilder.from_mapping(catalog_mapping).build()


@pytest.fixture
def snapshot_path(tmp_path: Path, catalog_mapping: dict[str, Any]) -> Path:
    """Write :func:`catalog_mapping` to a snapshot file and return its path."""

    path = tmp_path / "libs.json"
    path.write_text(json.dumps(catalog_mapping, indent=2), encoding="utf-8")
    return path
