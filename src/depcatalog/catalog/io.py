# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading and writing catalog snapshot documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, cast

from .errors import CatalogValidationError
from .types import JSONValue

if TYPE_CHECKING:
    from .model_catalog import VersionCatalog
    from .schema import SchemaRepository


def load_json_object(path: Path) -> Mapping[str, JSONValue]:
    """Load a JSON document from disk and ensure it is a JSON object.

    Args:
        path: Filesystem path to the JSON document.

    Returns:
        Mapping[str, JSONValue]: Parsed JSON mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        CatalogValidationError: If the document cannot be parsed or is not an object.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as stream:
        try:
            payload = cast(JSONValue, json.load(stream))
        except json.JSONDecodeError as exc:
            raise CatalogValidationError(f"{path}: failed to parse JSON ({exc.msg})") from exc
        except UnicodeDecodeError as exc:
            raise CatalogValidationError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
    if not isinstance(payload, Mapping):
        raise CatalogValidationError(f"{path}: expected a JSON object")
    return payload


def load_snapshot(
    path: Path,
    *,
    schemas: SchemaRepository | None = None,
    default_name: str | None = None,
) -> VersionCatalog:
    """Load, validate and build the catalog stored in a snapshot file.

    Args:
        path: Snapshot JSON file written by :func:`write_snapshot`.
        schemas: Optional pre-loaded schema repository.
        default_name: Catalog name used when the snapshot declares none.

    Returns:
        VersionCatalog: Catalog store described by the snapshot.

    Raises:
        FileNotFoundError: If the snapshot is missing.
        CatalogValidationError: If the snapshot is malformed.
        CatalogIntegrityError: If the snapshot violates catalog invariants.
    """
    from .builder import CatalogBuilder
    from .schema import SchemaRepository

    document = load_json_object(path)
    repository = schemas or SchemaRepository.load()
    repository.validate_snapshot(document, context=str(path))
    name = None if "name" in document else default_name
    return CatalogBuilder.from_mapping(document, name=name).build()


def write_snapshot(catalog: VersionCatalog, path: Path) -> Path:
    """Write ``catalog`` to ``path`` as indented, key-sorted JSON.

    Returns:
        Path: The path written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(catalog.to_dict(), indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return path


__all__ = ["load_json_object", "load_snapshot", "write_snapshot"]
