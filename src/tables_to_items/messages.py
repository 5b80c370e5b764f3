"""Message catalog used for user-facing conversion text."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from tables_to_items.errors import ConversionError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES: dict[str, str] = {
    "compendium-not-found": "Compendium {compendium} not found",
    "compendium-locked": "Compendium {compendium} is locked",
    "failed-create-item": "failed to create item {name}",
    "failed-create-entry": "failed to process entry {entry}",
    "invalid-result": "invalid result",
    "conversion-complete": "Created {count} items",
    "conversion-failed": "Conversion failed",
    "no-compendium-selected": "No compendium selected",
}


class MessageCatalog:
    """Key-based message lookup with ``str.format`` substitution.

    Unknown keys render as the key itself, and a template whose placeholders
    are not all supplied is returned unformatted.
    """

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages = dict(DEFAULT_MESSAGES)
        if messages:
            self._messages.update(messages)

    def localize(self, key: str) -> str:
        return self._messages.get(key, key)

    def format(self, key: str, **data: object) -> str:
        template = self.localize(key)
        try:
            return template.format(**data)
        except (KeyError, IndexError, ValueError):
            logger.warning("message %r could not be formatted with %s", key, sorted(data))
            return template

    @classmethod
    def from_json(cls, path: Path, *, prefix: str = "") -> MessageCatalog:
        """Load overrides from a flat JSON language file.

        Parameters
        ----------
        path : Path
            JSON object mapping message keys to templates.
        prefix : str, default=""
            Key prefix to strip, e.g. ``"tables-to-items."`` for Foundry-style
            namespaced language files.

        Raises
        ------
        ConversionError
            If the file cannot be read or is not a flat string mapping.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConversionError(f"Unable to read message catalog {path}: {exc}") from exc
        if not isinstance(raw, dict) or not all(
            isinstance(value, str) for value in raw.values()
        ):
            raise ConversionError(
                f"Message catalog {path} must be a JSON object of strings."
            )
        messages = {
            key.removeprefix(prefix) if prefix else key: value
            for key, value in raw.items()
        }
        return cls(messages)
