"""Unit tests for the pydantic data contract."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tables_to_items.errors import TableWriteError
from tables_to_items.schemas import (
    CreatedRecord,
    PackManifest,
    SourceEntry,
    SourceTable,
)


def test_entry_accepts_foundry_keys() -> None:
    """Map Foundry export keys onto entry fields."""
    entry = SourceEntry.model_validate(
        {
            "_id": "r1",
            "text": "Potion",
            "weight": 2,
            "range": [1, 3],
            "documentName": "Healing Potion",
            "documentCollection": "dnd5e.items",
            "documentId": "abc",
            "drawn": False,
        }
    )
    assert entry.id == "r1"
    assert entry.range == (1, 3)
    assert entry.document_name == "Healing Potion"
    assert entry.body == "Potion"


def test_entry_rejects_inverted_range() -> None:
    """Reject ranges whose lower bound exceeds the upper bound."""
    with pytest.raises(ValidationError, match="range lower bound"):
        SourceEntry(id="r1", range=(5, 2))


@pytest.mark.asyncio
async def test_update_entry_changes_description_in_place() -> None:
    """Update one entry by id and leave others untouched."""
    table = SourceTable(
        id="t", results=[SourceEntry(id="a"), SourceEntry(id="b", description="old")]
    )
    await table.update_entry("b", {"description": "new"})
    assert table.get_entry("b").description == "new"
    assert table.get_entry("a").description is None


@pytest.mark.asyncio
async def test_update_entry_rejects_unknown_entry_and_fields() -> None:
    """Raise TableWriteError for unknown ids and non-text fields."""
    table = SourceTable(id="t", results=[SourceEntry(id="a")])
    with pytest.raises(TableWriteError, match="no entry 'zz'"):
        await table.update_entry("zz", {"description": "x"})
    with pytest.raises(TableWriteError, match="not writable: weight"):
        await table.update_entry("a", {"weight": 3})


class _RecordObject:
    def __init__(self) -> None:
        self.id = "doc1"
        self.name = "Idol"
        self.type = "loot"
        self.uuid = None


def test_created_record_from_mapping_and_object() -> None:
    """Validate both store mappings and attribute objects."""
    from_mapping = CreatedRecord.model_validate(
        {"_id": "doc1", "name": "Idol", "type": "loot", "uuid": "Compendium.x.Item.doc1"}
    )
    from_object = CreatedRecord.model_validate(_RecordObject())
    assert from_mapping.reference == "Compendium.x.Item.doc1"
    assert from_object.reference == "doc1"


@pytest.mark.parametrize(
    "raw",
    [
        None,
        {"_id": "", "name": "Idol", "type": "loot"},
        {"_id": "doc1", "name": "", "type": "loot"},
        {"_id": "doc1", "name": "Idol"},
    ],
)
def test_created_record_rejects_malformed(raw: object) -> None:
    """Reject records without id, name or type."""
    with pytest.raises(ValidationError):
        CreatedRecord.model_validate(raw)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"id": 42, "name": "Idol", "type": "loot"}, "42"),
        ({"id": None, "_id": "abc", "name": "Idol", "type": "loot"}, "abc"),
        ({"id": "", "_id": "abc", "name": "Idol", "type": "loot"}, "abc"),
    ],
)
def test_created_record_picks_first_non_empty_identifier(
    raw: dict[str, object], expected: str
) -> None:
    """Coerce the identifier to a string and fall back to ``_id``."""
    assert CreatedRecord.model_validate(raw).id == expected


def test_table_name_may_be_absent() -> None:
    """Accept tables exported without a name."""
    table = SourceTable.model_validate({"_id": "tbl", "name": None, "results": []})
    assert table.name is None


def test_manifest_rejects_duplicate_names() -> None:
    """Refuse manifests declaring the same pack twice."""
    with pytest.raises(ValidationError, match="duplicate pack names: loot"):
        PackManifest.model_validate(
            {"packs": [{"name": "loot", "path": "a.db"}, {"name": "loot", "path": "b.db"}]}
        )
