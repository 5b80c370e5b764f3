"""Application-layer use-cases and option objects."""

from __future__ import annotations

from tables_to_items.application.naming import preview_item_names, resolve_item_name
from tables_to_items.application.options import (
    DEFAULT_NAME_PATTERN,
    ConversionOptions,
)
from tables_to_items.application.ports import (
    Destination,
    Localizer,
    Notifier,
    RecordStore,
    SourceTablePort,
)
from tables_to_items.application.results import ConversionResult, CreatedItem


def build_conversion_options(
    *,
    target_compendium: str,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
    add_back_links: bool = False,
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from tables_to_items.application.use_cases import build_conversion_options as _impl

    return _impl(
        target_compendium=target_compendium,
        name_pattern=name_pattern,
        use_result_name=use_result_name,
        add_back_links=add_back_links,
    )


async def convert_table_to_items(
    table: SourceTablePort,
    options: ConversionOptions,
    store: RecordStore,
    *,
    localizer: Localizer | None = None,
) -> ConversionResult:
    """Convert table entries into items via lazy use-case import."""
    from tables_to_items.application.use_cases import convert_table_to_items as _impl

    return await _impl(table, options, store, localizer=localizer)


def list_item_destinations(
    store: RecordStore, system: str | None = None
) -> list[Destination]:
    """List item compendiums via lazy use-case import."""
    from tables_to_items.application.use_cases import list_item_destinations as _impl

    return _impl(store, system)


def report_conversion(
    result: ConversionResult,
    notifier: Notifier,
    localizer: Localizer | None = None,
) -> bool:
    """Notify about a conversion outcome via lazy import."""
    from tables_to_items.application.reporting import report_conversion as _impl

    return _impl(result, notifier, localizer)


__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "CreatedItem",
    "DEFAULT_NAME_PATTERN",
    "build_conversion_options",
    "convert_table_to_items",
    "list_item_destinations",
    "preview_item_names",
    "report_conversion",
    "resolve_item_name",
]
