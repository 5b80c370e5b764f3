"""Application use-cases orchestrating table-to-item conversion."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from tables_to_items.application.naming import resolve_item_name
from tables_to_items.application.options import DEFAULT_NAME_PATTERN, ConversionOptions
from tables_to_items.application.ports import (
    Destination,
    Localizer,
    RecordStore,
    SourceTablePort,
)
from tables_to_items.application.results import ConversionResult, CreatedItem
from tables_to_items.errors import ConversionError
from tables_to_items.messages import MessageCatalog
from tables_to_items.schemas import (
    ConversionOptionsConfig,
    CreatedRecord,
    ItemPayload,
    ItemProvenance,
    SourceEntry,
)

logger = logging.getLogger(__name__)

ITEM_DOCUMENT_NAME = "Item"


def _describe(exc: Exception) -> str:
    """Return a one-line cause for an error message."""
    if isinstance(exc, ValidationError) and exc.errors():
        return exc.errors()[0]["msg"]
    return str(exc)


def build_item_payload(
    table: SourceTablePort, entry: SourceEntry, name: str
) -> ItemPayload:
    """Build the record payload for one entry."""
    return ItemPayload(
        name=name,
        description=entry.description or entry.name or "",
        provenance=ItemProvenance(
            source_table=table.id,
            source_table_name=table.name,
            source_entry_id=entry.id,
            original_weight=entry.weight,
            original_range=entry.range,
        ),
    )


def format_back_link(destination: Destination, record: CreatedRecord) -> str:
    """Return the content link pointing at ``record``."""
    return f"@Compendium[{destination.collection}.{record.id}]{{{record.name}}}"


async def add_back_link(
    table: SourceTablePort,
    entry: SourceEntry,
    record: CreatedRecord,
    destination: Destination,
) -> None:
    """Append a link to ``record`` to the entry description.

    Failures are logged and never propagated.
    """
    try:
        link = format_back_link(destination, record)
        original_text = entry.description or entry.name or ""
        updated_text = f"{original_text}\n\n<p><strong>Item:</strong> {link}</p>"
        await table.update_entry(entry.id, {"description": updated_text})
    except Exception:
        logger.exception(
            "failed to add back-link for entry %s of table %s", entry.id, table.id
        )


async def convert_table_to_items(
    table: SourceTablePort,
    options: ConversionOptions,
    store: RecordStore,
    *,
    localizer: Localizer | None = None,
) -> ConversionResult:
    """Use-case: create one item per table entry inside the target compendium.

    Entries are processed sequentially in table order. A failing entry is
    recorded in ``result.errors`` and the remaining entries are still
    attempted. Back-link and index refresh failures are only logged.

    Parameters
    ----------
    table : SourceTablePort
        Source roll table.
    options : ConversionOptions
        Destination and naming options.
    store : RecordStore
        Store used to resolve the destination and create records.
    localizer : Localizer | None, default=None
        Message source for error text. Defaults to the English catalog.

    Returns
    -------
    ConversionResult
        Aggregated outcome. This function does not raise.
    """
    messages = localizer or MessageCatalog()
    target = options.target_compendium

    try:
        destination = store.lookup(target)
    except Exception as exc:
        logger.exception("destination lookup failed for %s", target)
        return ConversionResult.failed(
            f"{messages.format('compendium-not-found', compendium=target)}: {exc}"
        )
    if destination is None:
        return ConversionResult.failed(
            messages.format("compendium-not-found", compendium=target)
        )
    if destination.locked:
        return ConversionResult.failed(
            messages.format("compendium-locked", compendium=target)
        )

    result = ConversionResult()
    for ordinal, entry in enumerate(table.results, start=1):
        await _convert_entry(
            table, entry, ordinal, options, store, destination, result, messages
        )

    result.success = not result.errors
    logger.info(
        "converted table %s into %s: %d created, %d errors",
        table.id,
        destination.collection,
        result.items_created,
        len(result.errors),
    )

    if result.items_created > 0:
        try:
            await destination.refresh_index()
        except Exception:
            logger.warning(
                "failed to refresh index of %s", destination.collection, exc_info=True
            )

    return result


async def _convert_entry(
    table: SourceTablePort,
    entry: SourceEntry,
    ordinal: int,
    options: ConversionOptions,
    store: RecordStore,
    destination: Destination,
    result: ConversionResult,
    messages: Localizer,
) -> None:
    try:
        name = resolve_item_name(table, entry, ordinal, options)
        payload = build_item_payload(table, entry, name)
    except Exception as exc:
        logger.error("failed to prepare entry %s: %s", entry.id, exc)
        result.record_error(
            f"{messages.format('failed-create-entry', entry=entry.id)}: {_describe(exc)}"
        )
        return

    failed = messages.format("failed-create-item", name=name)
    try:
        raw_record = await store.create(destination, payload)
    except Exception as exc:
        logger.error("error creating item %r: %s", name, exc)
        result.record_error(f"{failed}: {_describe(exc)}")
        return

    try:
        record = CreatedRecord.model_validate(raw_record)
    except ValidationError:
        logger.error("store returned an invalid record for item %r", name)
        result.record_error(f"{failed}: {messages.localize('invalid-result')}")
        return

    result.record_created(
        CreatedItem(id=record.reference, name=record.name, table_entry_id=entry.id)
    )
    if options.add_back_links:
        await add_back_link(table, entry, record, destination)


def list_item_destinations(
    store: RecordStore, system: str | None = None
) -> list[Destination]:
    """Return item compendiums known to ``store``, optionally for one game system."""
    return [
        destination
        for destination in store.destinations()
        if destination.document_name == ITEM_DOCUMENT_NAME
        and (system is None or destination.system == system)
    ]


def build_conversion_options(
    *,
    target_compendium: str,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    use_result_name: bool = False,
    add_back_links: bool = False,
) -> ConversionOptions:
    """Build typed option object from command/API params."""
    try:
        config = ConversionOptionsConfig(
            target_compendium=target_compendium,
            name_pattern=name_pattern,
            use_result_name=use_result_name,
            add_back_links=add_back_links,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid conversion options: {exc}") from exc
    return ConversionOptions(
        target_compendium=config.target_compendium,
        name_pattern=config.name_pattern,
        use_result_name=config.use_result_name,
        add_back_links=config.add_back_links,
    )

