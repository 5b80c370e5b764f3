"""Unit tests for the pack directory record store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tables_to_items.errors import StoreError
from tables_to_items.infrastructure.pack_store import (
    PackDirectoryStore,
    append_document,
    read_documents,
)
from tables_to_items.schemas import ItemPayload, ItemProvenance


def _payload(name: str) -> ItemPayload:
    return ItemPayload(
        name=name,
        provenance=ItemProvenance(
            source_table="t",
            source_table_name="Loot",
            source_entry_id="e1",
            original_weight=1,
            original_range=(1, 1),
        ),
    )


def test_manifest_packs_are_exposed_as_destinations(packs_dir: Path) -> None:
    """Expose every manifest pack with its metadata."""
    store = PackDirectoryStore(packs_dir)

    loot = store.lookup("loot")
    assert loot is not None
    assert loot.label == "Loot"
    assert loot.document_name == "Item"
    assert loot.path == packs_dir / "loot.db"
    assert store.lookup("srd-items").locked is True
    assert store.lookup("missing") is None
    assert [d.collection for d in store.destinations()] == [
        "loot",
        "srd-items",
        "heroes",
        "pf-loot",
    ]


@pytest.mark.asyncio
async def test_create_appends_json_lines(packs_dir: Path) -> None:
    """Append one JSON document per created item."""
    store = PackDirectoryStore(packs_dir)
    loot = store.lookup("loot")

    first = await store.create(loot, _payload("Idol"))
    second = await store.create(loot, _payload("Key"))

    lines = (packs_dir / "loot.db").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["_id"] for line in lines] == [first["_id"], second["_id"]]
    assert json.loads(lines[1])["flags"]["tables-to-items"]["sourceEntryId"] == "e1"


@pytest.mark.asyncio
async def test_create_refuses_locked_pack(packs_dir: Path) -> None:
    """Raise StoreError instead of writing to a locked pack."""
    store = PackDirectoryStore(packs_dir)
    with pytest.raises(StoreError, match="locked"):
        await store.create(store.lookup("srd-items"), _payload("Idol"))
    assert not (packs_dir / "srd.db").exists()


@pytest.mark.asyncio
async def test_refresh_index_reads_pack_file(packs_dir: Path) -> None:
    """Rebuild the index from documents already in the pack file."""
    (packs_dir / "loot.db").write_text(
        json.dumps({"_id": "old1", "name": "Old Sword"}), encoding="utf-8"
    )
    store = PackDirectoryStore(packs_dir)
    loot = store.lookup("loot")
    created = await store.create(loot, _payload("Idol"))

    await loot.refresh_index()

    assert loot.index == {"old1": "Old Sword", created["_id"]: "Idol"}


def test_append_repairs_missing_trailing_newline(tmp_path: Path) -> None:
    """Start a new line when the pack file does not end with one."""
    path = tmp_path / "pack.db"
    path.write_text('{"_id": "a", "name": "A"}', encoding="utf-8")
    append_document(path, {"_id": "b", "name": "B"})
    assert [doc["_id"] for doc in read_documents(path)] == ["a", "b"]


def test_read_documents_reports_bad_lines(tmp_path: Path) -> None:
    """Raise StoreError naming the offending line."""
    path = tmp_path / "pack.db"
    path.write_text('{"_id": "a"}\nnot json\n', encoding="utf-8")
    with pytest.raises(StoreError, match="pack.db:2"):
        read_documents(path)


def test_missing_or_invalid_manifest(tmp_path: Path) -> None:
    """Raise StoreError for unreadable or invalid manifests."""
    with pytest.raises(StoreError, match="Unable to read pack manifest"):
        PackDirectoryStore(tmp_path)
    (tmp_path / "packs.json").write_text(json.dumps({"packs": [{"name": "x"}]}))
    with pytest.raises(StoreError, match="Invalid pack manifest"):
        PackDirectoryStore(tmp_path)
