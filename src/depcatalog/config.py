# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Project settings read from ``[tool.depcatalog]`` in ``pyproject.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .accessors.codegen import DEFAULT_ROOT_CLASS
from .accessors.facility import EMPTY_VERSION_POLICY, RichVersionPolicy
from .catalog.types import DEFAULT_CATALOG_NAME

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "depcatalog"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class CatalogSettings(BaseModel):
    """Settings shared by the CLI commands."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid", populate_by_name=True)

    catalog_name: str = Field(default=DEFAULT_CATALOG_NAME, alias="catalog-name", min_length=1)
    snapshot: Path | None = None
    output: Path | None = None
    class_name: str = Field(default=DEFAULT_ROOT_CLASS, alias="class-name")
    rich_version_policy: RichVersionPolicy = Field(default=EMPTY_VERSION_POLICY, alias="rich-version-policy")

    @field_validator("class_name")
    @classmethod
    def _check_class_name(cls, value: str) -> str:
        """Ensure the generated root class name is a valid identifier.

        Raises:
            ValueError: If ``value`` is not a Python identifier.
        """

        if not value.isidentifier():
            raise ValueError(f"'{value}' is not a valid Python identifier")
        return value

    def resolve_paths(self, root: Path) -> CatalogSettings:
        """Return a copy with relative paths anchored at ``root``."""

        updates: dict[str, Path] = {}
        if self.snapshot is not None and not self.snapshot.is_absolute():
            updates["snapshot"] = root / self.snapshot
        if self.output is not None and not self.output.is_absolute():
            updates["output"] = root / self.output
        return self.model_copy(update=updates)


def load_settings(root: Path) -> CatalogSettings:
    """Load settings for the project rooted at ``root``.

    Args:
        root: Directory that may contain ``pyproject.toml``.

    Returns:
        CatalogSettings: Parsed settings, or defaults when no section exists.

    Raises:
        ConfigError: If ``pyproject.toml`` is unreadable or the section is invalid.
    """

    pyproject = root / PYPROJECT_FILENAME
    if not pyproject.is_file():
        return CatalogSettings()
    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{pyproject}: {exc}") from exc
    section = _tool_section(data)
    try:
        settings = CatalogSettings.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"{pyproject}: invalid [tool.{PYPROJECT_SECTION_KEY}] section: {exc}") from exc
    return settings.resolve_paths(root)


def _tool_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return section


__all__ = ["CatalogSettings", "ConfigError", "load_settings"]
