# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application exposing catalog inspection and accessor generation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.table import Table

from ..accessors.codegen import write_accessor_module
from ..accessors.tree import build_accessor_tree
from ..catalog.errors import CatalogError
from ..catalog.model_entries import Bundle, Dependency, EntryKind, Plugin, VersionEntry
from .shared import CLIError, CLILogger, build_cli_logger, configure_logging, load_catalog, settings_for

app = typer.Typer(
    help="Inspect version catalogs and generate typed accessor modules.",
    no_args_is_help=True,
    add_completion=False,
)

SnapshotArgument = Annotated[
    Path | None,
    typer.Argument(help="Catalog snapshot JSON; defaults to [tool.depcatalog].snapshot."),
]
RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root holding pyproject.toml.")]
KindOption = Annotated[EntryKind, typer.Option("--kind", "-k", help="Entry kind to inspect.", case_sensitive=False)]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Configure logging shared by every command."""

    configure_logging(verbose)


def describe_entry(entry: object) -> str:
    """Return the one-line rendering of a catalog entry."""

    if isinstance(entry, Dependency):
        return entry.coordinate
    if isinstance(entry, Plugin):
        return entry.notation
    if isinstance(entry, VersionEntry):
        return entry.constraint.display_name
    if isinstance(entry, Bundle):
        return ", ".join(member.alias for member in entry.members)
    return str(entry)


def _fail(logger: CLILogger, exc: CLIError) -> NoReturn:
    logger.fail(str(exc))
    raise typer.Exit(code=exc.exit_code)


@app.command("aliases")
def aliases_command(
    snapshot: SnapshotArgument = None,
    kind: KindOption = EntryKind.LIBRARY,
    plain: Annotated[bool, typer.Option("--plain", help="Print tab-separated lines instead of a table.")] = False,
    root: RootOption = Path("."),
    emoji: EmojiOption = False,
) -> None:
    """List the aliases declared under one entry kind."""

    logger = build_cli_logger(emoji=emoji)
    try:
        catalog = load_catalog(snapshot, settings_for(root))
    except CLIError as exc:
        _fail(logger, exc)
    entries = catalog.entries(kind)
    if plain:
        for alias in sorted(entries):
            logger.echo(f"{alias}\t{describe_entry(entries[alias])}")
        return
    table = Table(title=f"{catalog.name} {kind.section}")
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Value")
    for alias in sorted(entries):
        table.add_row(alias, describe_entry(entries[alias]))
    logger.console.print(table)


@app.command("resolve")
def resolve_command(
    alias: Annotated[str, typer.Argument(help="Dot-separated alias, e.g. kotlinx.coroutines.debug.")],
    snapshot: SnapshotArgument = None,
    kind: KindOption = EntryKind.LIBRARY,
    root: RootOption = Path("."),
    emoji: EmojiOption = False,
) -> None:
    """Navigate the accessor tree to ALIAS and print the resolved value."""

    logger = build_cli_logger(emoji=emoji)
    try:
        settings = settings_for(root)
        catalog = load_catalog(snapshot, settings)
        try:
            tree = build_accessor_tree(catalog, rich_version_policy=settings.rich_version_policy)
            value = tree.resolve(alias, kind).get()
        except (AttributeError, CatalogError) as exc:
            raise CLIError(str(exc)) from exc
    except CLIError as exc:
        _fail(logger, exc)
    if isinstance(value, tuple):
        for member in value:
            logger.echo(describe_entry(member))
        return
    logger.echo(describe_entry(value))


@app.command("generate")
def generate_command(
    snapshot: SnapshotArgument = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Destination module path.")] = None,
    class_name: Annotated[str | None, typer.Option("--class-name", help="Root class name.")] = None,
    root: RootOption = Path("."),
    emoji: EmojiOption = False,
) -> None:
    """Write a typed accessor module for the catalog."""

    logger = build_cli_logger(emoji=emoji)
    try:
        settings = settings_for(root)
        catalog = load_catalog(snapshot, settings)
        destination = output or settings.output
        if destination is None:
            raise CLIError("no --output given and none configured in [tool.depcatalog]")
        name = class_name or settings.class_name
        if not name.isidentifier():
            raise CLIError(f"'{name}' is not a valid Python identifier")
        try:
            written = write_accessor_module(catalog, destination, class_name=name)
        except (CatalogError, OSError) as exc:
            raise CLIError(f"cannot write accessors to {destination}: {exc}") from exc
    except CLIError as exc:
        _fail(logger, exc)
    logger.ok(f"wrote {name} accessors for catalog '{catalog.name}' to {written}")


@app.command("checksum")
def checksum_command(
    snapshot: SnapshotArgument = None,
    root: RootOption = Path("."),
    emoji: EmojiOption = False,
) -> None:
    """Print the SHA-256 checksum of the catalog contents."""

    logger = build_cli_logger(emoji=emoji)
    try:
        catalog = load_catalog(snapshot, settings_for(root))
    except CLIError as exc:
        _fail(logger, exc)
    logger.echo(catalog.checksum)


__all__ = ["app", "describe_entry"]
