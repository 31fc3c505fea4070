# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the ``depcatalog`` command line interface."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from depcatalog.catalog import CatalogIntegrityError, VersionCatalog
from depcatalog.cli import app

runner = CliRunner()
# the package re-exports the Typer object under the submodule name
cli_app = importlib.import_module("depcatalog.cli.app")


def test_resolve_prints_library_coordinate(snapshot_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["resolve", "kotlinx-coroutines-debug", str(snapshot_path), "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "org.jetbrains.kotlinx:kotlinx-coroutines-debug:1.9.0"


def test_resolve_other_kinds(snapshot_path: Path, tmp_path: Path) -> None:
    version = runner.invoke(app, ["resolve", "ktor", str(snapshot_path), "--kind", "version", "-r", str(tmp_path)])
    bundle = runner.invoke(app, ["resolve", "ktor.server", str(snapshot_path), "-k", "bundle", "-r", str(tmp_path)])

    assert version.exit_code == 0, version.output
    assert version.output.strip() == "3.0.2"
    assert bundle.exit_code == 0, bundle.output
    assert bundle.output.splitlines() == [
        "io.ktor:ktor-server-core:3.0.2",
        "io.ktor:ktor-server-netty:3.0.2",
    ]


def test_resolve_unknown_alias_fails(snapshot_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["resolve", "kotlinx.coroutines.core", str(snapshot_path), "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert "no accessor 'core'" in result.output


def test_aliases_plain_output(snapshot_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["aliases", str(snapshot_path), "--kind", "plugin", "--plain", "--root", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "dokka\torg.jetbrains.dokka:1.9.20",
        "jreleaser\torg.jreleaser:1.14.0",
        "kotlin.jvm\torg.jetbrains.kotlin.jvm:2.1.0",
        "kotlin.serialization\torg.jetbrains.kotlin.plugin.serialization:2.1.0",
    ]


def test_aliases_table_lists_libraries(snapshot_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["aliases", str(snapshot_path), "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "kotlinx.coroutines.debug" in result.output
    assert "libs libraries" in result.output


def test_generate_uses_configured_paths(tmp_path: Path, catalog_mapping: dict[str, Any]) -> None:
    (tmp_path / "catalog").mkdir()
    (tmp_path / "catalog" / "libs.json").write_text(json.dumps(catalog_mapping), encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        '[tool.depcatalog]\nsnapshot = "catalog/libs.json"\noutput = "build/libs.py"\nclass-name = "Libs"\n',
        encoding="utf-8",
    )

    result = runner.invoke(app, ["generate", "--root", str(tmp_path)])

    generated = tmp_path / "build" / "libs.py"
    assert result.exit_code == 0, result.output
    assert "wrote Libs accessors for catalog 'libs'" in result.output
    assert "class Libs(GeneratedRoot):" in generated.read_text(encoding="utf-8")


def test_generate_requires_output(snapshot_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["generate", str(snapshot_path), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "no --output given" in result.output


def test_checksum_matches_catalog(snapshot_path: Path, tmp_path: Path, catalog: VersionCatalog) -> None:
    result = runner.invoke(app, ["checksum", str(snapshot_path), "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == catalog.checksum


def test_missing_snapshot_is_reported(tmp_path: Path) -> None:
    result = runner.invoke(app, ["checksum", str(tmp_path / "absent.json"), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "catalog snapshot not found" in result.output


def test_unconfigured_snapshot_is_reported(tmp_path: Path) -> None:
    result = runner.invoke(app, ["checksum", "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "no catalog snapshot given" in result.output


def test_colliding_accessor_names_fail_cleanly(tmp_path: Path, catalog_mapping: dict[str, Any]) -> None:
    catalog_mapping["libraries"]["jsonAPI"] = {"module": "org.example:json-api"}
    catalog_mapping["libraries"]["jsonApi"] = {"module": "org.example:json-api-core"}
    path = tmp_path / "collide.json"
    path.write_text(json.dumps(catalog_mapping), encoding="utf-8")

    result = runner.invoke(app, ["resolve", "mockk", str(path), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, CatalogIntegrityError)
    assert "map onto the same accessor" in result.output


def test_resolve_reports_tree_errors(snapshot_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_tree(*_args: object, **_kwargs: object) -> None:
        raise CatalogIntegrityError("libs: group '<root>': names bound twice: json_api")

    monkeypatch.setattr(cli_app, "build_accessor_tree", broken_tree)

    result = runner.invoke(app, ["resolve", "mockk", str(snapshot_path), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "names bound twice" in result.output


def test_generate_reports_write_errors(snapshot_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_writer(*_args: object, **_kwargs: object) -> None:
        raise CatalogIntegrityError("libs: group '<root>': names bound twice: json_api")

    monkeypatch.setattr(cli_app, "write_accessor_module", broken_writer)

    result = runner.invoke(
        app,
        ["generate", str(snapshot_path), "-o", str(tmp_path / "libs.py"), "--root", str(tmp_path)],
    )

    assert result.exit_code == 1
    assert "cannot write accessors" in result.output
    assert not (tmp_path / "libs.py").exists()


def test_undecodable_snapshot_fails_cleanly(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"schemaVersion": "1.0.0", "name": "caf\xe9"}')

    result = runner.invoke(app, ["checksum", str(path), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "not valid UTF-8" in result.output
