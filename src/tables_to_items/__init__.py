"""Convert roll-table entries into compendium items."""

from __future__ import annotations

from pathlib import Path

from tables_to_items.application import (
    ConversionOptions,
    ConversionResult,
    CreatedItem,
    build_conversion_options,
    convert_table_to_items,
    list_item_destinations,
    preview_item_names,
    report_conversion,
    resolve_item_name,
)
from tables_to_items.application.options import DEFAULT_NAME_PATTERN

__version__ = "0.1.0"


def convert_table_file(
    table_path: Path,
    packs_dir: Path,
    *,
    target_compendium: str,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
    add_back_links: bool = False,
) -> ConversionResult:
    """Convert a roll table JSON export into items of a pack directory.

    Parameters
    ----------
    table_path : Path
        RollTable JSON export.
    packs_dir : Path
        Directory containing ``packs.json`` and the pack files.
    target_compendium : str
        Name of the destination pack.
    name_pattern : str, default="{tableName} #{number}"
        Template for generated names.
    use_result_name : bool, default=False
        Prefer referenced document names.
    add_back_links : bool, default=False
        Write a link to each created item into the table file.

    Returns
    -------
    ConversionResult
        Aggregated conversion outcome.
    """
    from .api import convert_table_file as _impl

    return _impl(
        table_path,
        packs_dir,
        target_compendium=target_compendium,
        name_pattern=name_pattern,
        use_result_name=use_result_name,
        add_back_links=add_back_links,
    )


__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "CreatedItem",
    "build_conversion_options",
    "convert_table_file",
    "convert_table_to_items",
    "list_item_destinations",
    "preview_item_names",
    "report_conversion",
    "resolve_item_name",
]
