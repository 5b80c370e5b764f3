#!/usr/bin/env python3
"""
tables_to_items.cli.cli

Typer-based CLI for converting roll-table exports into compendium items.

Examples
--------
Install core + CLI:

    uv pip install -e ".[cli]"

List item packs of a pack directory:

    tables-to-items packs ./packs --system dnd5e

Convert a table, linking entries back to the created items:

    tables-to-items convert loot-table.json --packs-dir ./packs \\
        --compendium loot --add-back-links
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from tables_to_items.application.options import DEFAULT_NAME_PATTERN
from tables_to_items.errors import TablesToItemsError
from tables_to_items.messages import MessageCatalog
from tables_to_items.schemas import MODULE_ID

app = typer.Typer(
    name="tables-to-items",
    help="Convert roll-table entries into compendium items.",
    no_args_is_help=True,
)

PACKS_DIR_HELP = "Directory holding packs.json and the pack files."
NAME_PATTERN_HELP = "Item name template; supports {tableName} and {number}."
USE_RESULT_NAME_HELP = "Prefer the name of a referenced document when present."


class EchoNotifier:
    """Notifier that writes messages to the terminal."""

    def info(self, message: str) -> None:
        typer.echo(f"[green]✓[/green] {message}")

    def warn(self, message: str) -> None:
        typer.echo(f"[yellow]![/yellow] {message}", err=True)

    def error(self, message: str) -> None:
        typer.echo(f"[red]✗[/red] {message}", err=True)


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised while preparing or running the conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    return 1


def _load_localizer(lang: Path | None) -> MessageCatalog:
    """Return the default catalog, or one loaded from ``lang``."""
    if lang is None:
        return MessageCatalog()
    return MessageCatalog.from_json(lang, prefix=f"{MODULE_ID}.")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    table_path: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="Path to a RollTable JSON export.",
    ),
    packs_dir: Path = typer.Option(
        ...,
        "--packs-dir",
        envvar="TABLES_TO_ITEMS_PACKS_DIR",
        exists=True,
        file_okay=False,
        help=PACKS_DIR_HELP,
    ),
    compendium: str = typer.Option(
        "",
        "--compendium",
        envvar="TABLES_TO_ITEMS_COMPENDIUM",
        help="Destination pack name.",
    ),
    name_pattern: str = typer.Option(
        DEFAULT_NAME_PATTERN,
        "--name-pattern",
        envvar="TABLES_TO_ITEMS_NAME_PATTERN",
        help=NAME_PATTERN_HELP,
    ),
    use_result_name: bool = typer.Option(
        False, "--use-result-name", help=USE_RESULT_NAME_HELP
    ),
    add_back_links: bool = typer.Option(
        False,
        "--add-back-links",
        help="Append a link to each created item to its table entry (rewrites the table file).",
    ),
    lang: Path | None = typer.Option(
        None,
        "--lang",
        envvar="TABLES_TO_ITEMS_LANG",
        exists=True,
        dir_okay=False,
        help="JSON message catalog overriding the built-in English messages.",
    ),
) -> None:
    """Convert every entry of a roll table into an item of a pack.

    Exits with code 1 when any entry failed; entries that succeeded stay
    in the pack.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    notifier = EchoNotifier()

    try:
        localizer = _load_localizer(lang)
    except TablesToItemsError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if not compendium.strip():
        notifier.warn(localizer.localize("no-compendium-selected"))
        raise typer.Exit(code=2)

    try:
        from tables_to_items.api import convert_table_file
        from tables_to_items.application.reporting import report_conversion

        result = convert_table_file(
            table_path,
            packs_dir,
            target_compendium=compendium,
            name_pattern=name_pattern,
            use_result_name=use_result_name,
            add_back_links=add_back_links,
            localizer=localizer,
        )
    except TablesToItemsError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    for item in result.created_items:
        typer.echo(f"  {item.name} -> {item.id}")
    if not report_conversion(result, notifier, localizer):
        raise typer.Exit(code=1)


@app.command("packs")
def packs_cmd(
    ctx: typer.Context,
    packs_dir: Path = typer.Argument(
        ...,
        envvar="TABLES_TO_ITEMS_PACKS_DIR",
        exists=True,
        file_okay=False,
        help=PACKS_DIR_HELP,
    ),
    system: str | None = typer.Option(
        None, "--system", help="Only list packs for this game system id."
    ),
) -> None:
    """List item packs that can receive converted entries."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from tables_to_items.api import list_pack_destinations

        destinations = list_pack_destinations(packs_dir, system)
    except TablesToItemsError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if not destinations:
        typer.echo("No item packs found.")
        return
    for destination in destinations:
        state = " (locked)" if destination.locked else ""
        typer.echo(f"{destination.collection}\t{destination.label}{state}")


@app.command("names")
def names_cmd(
    ctx: typer.Context,
    table_path: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="Path to a RollTable JSON export.",
    ),
    name_pattern: str = typer.Option(
        DEFAULT_NAME_PATTERN,
        "--name-pattern",
        envvar="TABLES_TO_ITEMS_NAME_PATTERN",
        help=NAME_PATTERN_HELP,
    ),
    use_result_name: bool = typer.Option(
        False, "--use-result-name", help=USE_RESULT_NAME_HELP
    ),
) -> None:
    """Preview the item names a conversion would generate."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from tables_to_items.api import preview_table_file_names

        names = preview_table_file_names(
            table_path,
            name_pattern=name_pattern,
            use_result_name=use_result_name,
        )
    except TablesToItemsError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    for ordinal, (entry_id, name) in enumerate(names, start=1):
        typer.echo(f"{ordinal:>3}  {entry_id}  {name}")


if __name__ == "__main__":
    app()
