"""Pydantic schemas for tables, payloads, created records and pack manifests."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from tables_to_items.application.options import DEFAULT_NAME_PATTERN
from tables_to_items.errors import TableWriteError
from tables_to_items.types import Document, FieldMap

MODULE_ID = "tables-to-items"
DEFAULT_ITEM_TYPE = "loot"

_WRITABLE_ENTRY_FIELDS = frozenset({"name", "description", "text"})
_RECORD_KEYS = ("id", "_id", "name", "type", "uuid")


class SourceEntry(BaseModel):
    """One weighted row of a roll table.

    Accepts Foundry export keys (``_id``, ``documentName``, ...) as well as the
    Python field names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    id: str = Field(alias="_id", min_length=1)
    name: str | None = None
    description: str | None = None
    text: str | None = None
    weight: float = Field(default=1.0, ge=0)
    range: tuple[int, int] = (1, 1)
    document_name: str | None = Field(default=None, alias="documentName")
    document_collection: str | None = Field(default=None, alias="documentCollection")
    document_id: str | None = Field(default=None, alias="documentId")

    @field_validator("range")
    @classmethod
    def _validate_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if low > high:
            raise ValueError("range lower bound must not exceed upper bound.")
        return value

    @property
    def body(self) -> str:
        """Return the entry's text body, preferring ``description``."""
        return self.description or self.text or ""


class SourceTable(BaseModel):
    """Roll table holding an ordered sequence of entries.

    ``results`` order is significant: it defines the ordinal of each entry.
    The only mutation is :meth:`update_entry`, used for back-link write-back.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id", min_length=1)
    name: str | None = None
    results: list[SourceEntry] = Field(default_factory=list)

    def get_entry(self, entry_id: str) -> SourceEntry:
        """Return entry by identifier.

        Raises
        ------
        KeyError
            If no entry carries ``entry_id``.
        """
        for entry in self.results:
            if entry.id == entry_id:
                return entry
        raise KeyError(entry_id)

    async def update_entry(self, entry_id: str, fields: FieldMap) -> None:
        """Update text fields of one entry in place.

        Parameters
        ----------
        entry_id : str
            Identifier of the entry to update.
        fields : Mapping[str, FieldValue]
            Partial field values; only ``name``, ``description`` and ``text``
            are writable.

        Raises
        ------
        TableWriteError
            If the entry is unknown or a field cannot be written.
        """
        try:
            entry = self.get_entry(entry_id)
        except KeyError as exc:
            raise TableWriteError(
                f"Table '{self.id}' has no entry '{entry_id}'."
            ) from exc

        unknown = sorted(set(fields) - _WRITABLE_ENTRY_FIELDS)
        if unknown:
            raise TableWriteError(
                f"Entry fields are not writable: {', '.join(unknown)}"
            )
        try:
            for key, value in fields.items():
                setattr(entry, key, value)
        except ValidationError as exc:
            raise TableWriteError(f"Invalid entry update for '{entry_id}': {exc}") from exc


class ItemProvenance(BaseModel):
    """Source details stored in the created item's flags."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    source_table: str
    source_table_name: str | None = None
    source_entry_id: str
    original_weight: float
    original_range: tuple[int, int]


class ItemPayload(BaseModel):
    """Record payload handed to a record store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    type: str = DEFAULT_ITEM_TYPE
    description: str = ""
    provenance: ItemProvenance

    def to_document(self) -> Document:
        """Render the payload as a Foundry item document."""
        return {
            "name": self.name,
            "type": self.type,
            "system": {
                "description": {
                    "value": self.description,
                    "chat": "",
                    "unidentified": "",
                }
            },
            "flags": {
                MODULE_ID: self.provenance.model_dump(mode="json", by_alias=True),
            },
        }


class CreatedRecord(BaseModel):
    """Validated view of a record returned by a store.

    Both mappings and attribute objects are accepted. The identifier is the
    first non-empty of ``id`` and ``_id``, converted to a string.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    uuid: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _pick_identifier(cls, data: Any) -> Any:
        if data is None or isinstance(data, (str, bytes)):
            return data
        if isinstance(data, Mapping):
            values = dict(data)
        else:
            values = {key: getattr(data, key, None) for key in _RECORD_KEYS}
        identifier = values.get("id") or values.get("_id")
        values["id"] = str(identifier) if identifier else ""
        return values

    @property
    def reference(self) -> str:
        """Return the identifier reported back to callers."""
        return self.uuid or self.id


class ConversionOptionsConfig(BaseModel):
    """Validated input for conversion options."""

    model_config = ConfigDict(extra="forbid")

    target_compendium: str
    name_pattern: str = DEFAULT_NAME_PATTERN
    use_result_name: bool = False
    add_back_links: bool = False

    @field_validator("target_compendium")
    @classmethod
    def _validate_target(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("target_compendium cannot be empty.")
        return value

    @field_validator("name_pattern")
    @classmethod
    def _default_blank_pattern(cls, value: str) -> str:
        if not value.strip():
            return DEFAULT_NAME_PATTERN
        return value


class PackMetadata(BaseModel):
    """One compendium pack declared in a ``packs.json`` manifest."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    label: str = ""
    type: str = "Item"
    system: str | None = None
    path: Path
    locked: bool = False


class PackManifest(BaseModel):
    """Manifest describing the packs of a pack directory."""

    model_config = ConfigDict(extra="ignore")

    packs: list[PackMetadata] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> PackManifest:
        names = [pack.name for pack in self.packs]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate pack names: {', '.join(duplicates)}")
        return self
