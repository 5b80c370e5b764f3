"""Item name resolution for roll-table entries."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tables_to_items.application.options import (
    DEFAULT_NAME_PATTERN,
    GENERIC_RESULT_NAME,
    ConversionOptions,
)

if TYPE_CHECKING:
    from tables_to_items.application.ports import SourceTablePort
    from tables_to_items.schemas import SourceEntry

FALLBACK_TABLE_NAME = "Table"
MAX_SENTENCE_LENGTH = 50
MAX_SENTENCE_WORDS = 7
MIN_DERIVED_NAME_LENGTH = 3

_TAG_RE = re.compile(r"<[^>]*>")
_SENTENCE_END_RE = re.compile(r"[.!?]")
_TRAILING_PUNCT_RE = re.compile(r"[.,!?;:]+$")


def _is_specific(name: str | None) -> bool:
    return bool(name and name.strip() and name.strip() != GENERIC_RESULT_NAME)


def render_name_pattern(pattern: str, table_name: str, ordinal: int) -> str:
    """Substitute ``{tableName}`` and ``{number}`` tokens in ``pattern``.

    ``#{number}`` and ``{number}`` both become the ordinal zero-padded to
    three digits, so the ``#`` is never doubled.
    """
    padded = f"{ordinal:03d}"
    return (
        pattern.replace("{tableName}", table_name)
        .replace("#{number}", f"#{padded}")
        .replace("{number}", padded)
    )


def name_from_description(text: str) -> str | None:
    """Derive a short name from the first sentence of an entry body.

    Returns ``None`` when nothing longer than three characters remains.
    """
    clean = _TAG_RE.sub("", text).strip()
    if not clean:
        return None
    sentence = _SENTENCE_END_RE.split(clean, maxsplit=1)[0].strip()
    if len(sentence) > MAX_SENTENCE_LENGTH:
        sentence = " ".join(sentence.split()[:MAX_SENTENCE_WORDS])
    sentence = _TRAILING_PUNCT_RE.sub("", sentence).strip()
    if len(sentence) > MIN_DERIVED_NAME_LENGTH:
        return sentence
    return None


def resolve_item_name(
    table: SourceTablePort,
    entry: SourceEntry,
    ordinal: int,
    options: ConversionOptions,
) -> str:
    """Return the display name for the item created from ``entry``.

    Parameters
    ----------
    table : SourceTablePort
        Table the entry belongs to.
    entry : SourceEntry
        Entry being converted.
    ordinal : int
        1-based position of the entry in ``table.results``.
    options : ConversionOptions
        Naming preferences.

    Returns
    -------
    str
        Non-empty name. Rules are tried in order: referenced document name
        (when ``use_result_name``), the entry's own name, a name derived from
        the entry body (only when the default pattern would apply), then the
        rendered pattern.
    """
    if options.use_result_name and _is_specific(entry.document_name):
        return entry.document_name

    if _is_specific(entry.name):
        return entry.name.strip()

    table_name = table.name or FALLBACK_TABLE_NAME
    pattern = options.name_pattern if options.name_pattern.strip() else DEFAULT_NAME_PATTERN
    rendered = render_name_pattern(pattern, table_name, ordinal)

    # Only fall back to the body when the render is indistinguishable from the
    # default pattern, including custom patterns that render identically.
    if not options.use_result_name and rendered == render_name_pattern(
        DEFAULT_NAME_PATTERN, table_name, ordinal
    ):
        derived = name_from_description(entry.body)
        if derived is not None:
            return derived

    return rendered


def preview_item_names(
    table: SourceTablePort, options: ConversionOptions
) -> list[str]:
    """Return resolved names for every entry of ``table`` in order."""
    return [
        resolve_item_name(table, entry, ordinal, options)
        for ordinal, entry in enumerate(table.results, start=1)
    ]
