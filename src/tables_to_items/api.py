"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

import asyncio
from pathlib import Path

from tables_to_items.application.naming import preview_item_names
from tables_to_items.application.options import DEFAULT_NAME_PATTERN, ConversionOptions
from tables_to_items.application.ports import Destination, Localizer
from tables_to_items.application.results import ConversionResult
from tables_to_items.application.use_cases import (
    build_conversion_options,
    convert_table_to_items,
    list_item_destinations,
)
from tables_to_items.infrastructure.pack_store import PackDirectoryStore
from tables_to_items.infrastructure.table_files import load_table


async def convert_table_file_async(
    table_path: Path,
    packs_dir: Path,
    *,
    target_compendium: str,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
    add_back_links: bool = False,
    localizer: Localizer | None = None,
) -> ConversionResult:
    """Convert a roll table export into items of a pack directory."""
    options = build_conversion_options(
        target_compendium=target_compendium,
        name_pattern=name_pattern,
        use_result_name=use_result_name,
        add_back_links=add_back_links,
    )
    table = load_table(table_path)
    store = PackDirectoryStore(packs_dir)
    return await convert_table_to_items(table, options, store, localizer=localizer)


def convert_table_file(
    table_path: Path,
    packs_dir: Path,
    *,
    target_compendium: str,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
    add_back_links: bool = False,
    localizer: Localizer | None = None,
) -> ConversionResult:
    """Blocking wrapper around :func:`convert_table_file_async`.

    Raises
    ------
    ConversionError
        If options are invalid or the table file cannot be loaded.
    StoreError
        If the pack manifest cannot be loaded.
    """
    return asyncio.run(
        convert_table_file_async(
            table_path,
            packs_dir,
            target_compendium=target_compendium,
            name_pattern=name_pattern,
            use_result_name=use_result_name,
            add_back_links=add_back_links,
            localizer=localizer,
        )
    )


def list_pack_destinations(
    packs_dir: Path, system: str | None = None
) -> list[Destination]:
    """Return item packs declared in ``packs_dir``."""
    return list_item_destinations(PackDirectoryStore(packs_dir), system)


def preview_table_file_names(
    table_path: Path,
    *,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
) -> list[tuple[str, str]]:
    """Return ``(entry id, item name)`` pairs a conversion would produce."""
    table = load_table(table_path)
    options = ConversionOptions(
        target_compendium="",
        name_pattern=name_pattern,
        use_result_name=use_result_name,
    )
    names = preview_item_names(table, options)
    return [(entry.id, name) for entry, name in zip(table.results, names, strict=True)]
