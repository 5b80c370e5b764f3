"""Typed option objects for table conversion."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_NAME_PATTERN = "{tableName} #{number}"
GENERIC_RESULT_NAME = "TableResult"


@dataclass(frozen=True)
class ConversionOptions:
    """User-chosen conversion options.

    Parameters
    ----------
    target_compendium : str
        Identifier of the destination compendium.
    name_pattern : str, default="{tableName} #{number}"
        Template for generated item names.
    use_result_name : bool, default=False
        Prefer the name of a referenced document when the entry has one.
    add_back_links : bool, default=False
        Append a link to the created item to each source entry.
    """

    target_compendium: str
    name_pattern: str = DEFAULT_NAME_PATTERN
    use_result_name: bool = False
    add_back_links: bool = False
