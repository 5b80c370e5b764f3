"""Roll tables loaded from Foundry JSON exports."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path

from pydantic import PrivateAttr, ValidationError

from tables_to_items.errors import ConversionError, TableWriteError
from tables_to_items.schemas import SourceTable
from tables_to_items.types import FieldMap

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "description", "text")


class FileSourceTable(SourceTable):
    """Source table whose entry updates are written back to its JSON file.

    Only entry text fields are rewritten; every other key of the export is
    preserved as loaded.
    """

    _path: Path = PrivateAttr()
    _raw: dict[str, object] = PrivateAttr(default_factory=dict)

    @property
    def path(self) -> Path:
        return self._path

    async def update_entry(self, entry_id: str, fields: FieldMap) -> None:
        previous = {
            entry.id: entry.model_dump(include=set(_TEXT_FIELDS)) for entry in self.results
        }
        await super().update_entry(entry_id, fields)
        try:
            self.save()
        except OSError as exc:
            entry = self.get_entry(entry_id)
            for key, value in previous[entry_id].items():
                setattr(entry, key, value)
            raise TableWriteError(f"Unable to write table file {self._path}: {exc}") from exc

    def save(self) -> None:
        """Write entry text fields back into the table file.

        The file is replaced atomically; the loaded export is only updated
        once the write succeeded.
        """
        raw = copy.deepcopy(self._raw)
        raw_results = raw.setdefault("results", [])
        by_id = {
            str(item.get("_id", item.get("id"))): item
            for item in raw_results
            if isinstance(item, dict)
        }
        for entry in self.results:
            target = by_id.get(entry.id)
            if target is None:
                logger.warning("entry %s missing from %s; not saved", entry.id, self._path)
                continue
            for key in _TEXT_FIELDS:
                value = getattr(entry, key)
                if value is not None:
                    target[key] = value
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._path)
        finally:
            tmp_path.unlink(missing_ok=True)
        self._raw = raw


def load_table(path: Path) -> FileSourceTable:
    """Load a roll table export.

    Parameters
    ----------
    path : Path
        Path to a RollTable JSON document.

    Returns
    -------
    FileSourceTable
        Table bound to ``path`` for back-link write-back.

    Raises
    ------
    ConversionError
        If the file cannot be read or does not describe a roll table.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConversionError(f"Unable to read table file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConversionError(f"Table file {path} must contain a JSON object.")
    try:
        table = FileSourceTable.model_validate(raw)
    except ValidationError as exc:
        raise ConversionError(f"Invalid roll table {path}: {exc}") from exc
    table._path = path
    table._raw = raw
    return table
