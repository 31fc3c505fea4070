# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating catalog snapshot documents."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from jsonschema import Draft202012Validator
from jsonschema import exceptions as jsonschema_exceptions

from .errors import CatalogValidationError
from .io import load_json_object
from .types import JSONValue

SCHEMA_ROOT: Final[Path] = Path(__file__).resolve().parent / "schema"
SNAPSHOT_SCHEMA_FILENAME: Final[str] = "catalog_snapshot.schema.json"


@runtime_checkable
class SchemaValidator(Protocol):
    """Minimal interface exposed by jsonschema validators."""

    def validate(self, instance: JSONValue) -> None:
        """Validate ``instance`` against the bound schema."""

    def iter_errors(self, instance: JSONValue) -> Iterable[jsonschema_exceptions.ValidationError]:
        """Iterate over validation errors for ``instance``."""


@dataclass(frozen=True, slots=True)
class SchemaRepository:
    """Hold the validator used for catalog snapshot documents."""

    schema_root: Path
    snapshot_validator: SchemaValidator

    @classmethod
    def load(cls, schema_root: Path | None = None) -> SchemaRepository:
        """Load schema validators from disk.

        Args:
            schema_root: Optional override for the schema directory; defaults
                to the schemas bundled with the package.

        Returns:
            SchemaRepository: Repository configured with the snapshot validator.
        """
        resolved_root = schema_root or SCHEMA_ROOT
        schema = load_json_object(resolved_root / SNAPSHOT_SCHEMA_FILENAME)
        Draft202012Validator.check_schema(schema)
        return cls(schema_root=resolved_root, snapshot_validator=Draft202012Validator(schema))

    def validate_snapshot(self, document: JSONValue, *, context: str) -> None:
        """Validate ``document`` against the snapshot schema.

        Args:
            document: Parsed snapshot payload.
            context: Human-readable context used in error messages.

        Raises:
            CatalogValidationError: When the document fails schema validation.
        """

        errors = sorted(
            self.snapshot_validator.iter_errors(document),
            key=lambda error: [str(part) for part in error.path],
        )
        if not errors:
            return
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise CatalogValidationError(f"{context}: {location}: {first.message}")


__all__ = ["SCHEMA_ROOT", "SchemaRepository", "SchemaValidator"]
