# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared CLI helpers: error type, logger adapter and catalog loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from ..catalog.errors import CatalogError
from ..catalog.io import load_snapshot
from ..catalog.model_catalog import VersionCatalog
from ..config import CatalogSettings, ConfigError, load_settings
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project console helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool

    def fail(self, message: str) -> None:
        """Log a failure message."""

        core_fail(message, use_emoji=self.use_emoji, use_color=False, console=self.console)

    def warn(self, message: str) -> None:
        """Log a warning message."""

        core_warn(message, use_emoji=self.use_emoji, use_color=False, console=self.console)

    def ok(self, message: str) -> None:
        """Log a success message."""

        core_ok(message, use_emoji=self.use_emoji, use_color=False, console=self.console)

    def info(self, message: str) -> None:
        """Log an informational message."""

        core_info(message, use_emoji=self.use_emoji, use_color=False, console=self.console)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console."""

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji)


def configure_logging(verbose: bool) -> None:
    """Route library log records to stderr at DEBUG or WARNING level."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def settings_for(root: Path) -> CatalogSettings:
    """Load project settings, converting configuration failures to :class:`CLIError`."""

    try:
        return load_settings(root.resolve())
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc


def load_catalog(snapshot: Path | None, settings: CatalogSettings) -> VersionCatalog:
    """Load the catalog from ``snapshot`` or the configured snapshot path.

    Raises:
        CLIError: If no snapshot is known or it cannot be loaded.
    """

    path = snapshot or settings.snapshot
    if path is None:
        raise CLIError("no catalog snapshot given and none configured in [tool.depcatalog]")
    try:
        return load_snapshot(path, default_name=settings.catalog_name)
    except FileNotFoundError as exc:
        raise CLIError(f"catalog snapshot not found: {path}") from exc
    except CatalogError as exc:
        raise CLIError(str(exc)) from exc


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "configure_logging",
    "load_catalog",
    "settings_for",
]
