"""Shared pytest configuration, markers and table fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tables_to_items.schemas import SourceEntry, SourceTable


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def make_table(*entries: SourceEntry, name: str = "Loot", table_id: str = "tbl1") -> SourceTable:
    """Build a source table from entries."""
    return SourceTable(id=table_id, name=name, results=list(entries))


@pytest.fixture
def loot_table() -> SourceTable:
    """Three-entry table mixing named, referenced and flavor-text entries."""
    return make_table(
        SourceEntry(id="e1", name="Golden Idol", weight=2, range=(1, 2)),
        SourceEntry(
            id="e2",
            name="TableResult",
            document_name="Healing Potion",
            document_collection="dnd5e.items",
            document_id="abc123",
            range=(3, 3),
        ),
        SourceEntry(
            id="e3",
            description="<p>A rusty old key that opens nothing.</p>",
            range=(4, 6),
        ),
    )


@pytest.fixture
def table_file(tmp_path: Path) -> Path:
    """RollTable JSON export with Foundry-style keys."""
    path = tmp_path / "loot-table.json"
    path.write_text(
        json.dumps(
            {
                "_id": "tblLoot",
                "name": "Loot",
                "formula": "1d6",
                "results": [
                    {"_id": "r1", "name": "Golden Idol", "weight": 1, "range": [1, 2]},
                    {
                        "_id": "r2",
                        "description": "<p>A rusty old key that opens nothing.</p>",
                        "weight": 1,
                        "range": [3, 4],
                    },
                    {"_id": "r3", "weight": 1, "range": [5, 6]},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def packs_dir(tmp_path: Path) -> Path:
    """Pack directory with an open loot pack, a locked pack and an actor pack."""
    root = tmp_path / "packs"
    root.mkdir()
    (root / "packs.json").write_text(
        json.dumps(
            {
                "packs": [
                    {"name": "loot", "label": "Loot", "system": "dnd5e", "path": "loot.db"},
                    {
                        "name": "srd-items",
                        "label": "SRD Items",
                        "system": "dnd5e",
                        "path": "srd.db",
                        "locked": True,
                    },
                    {"name": "heroes", "type": "Actor", "system": "dnd5e", "path": "heroes.db"},
                    {"name": "pf-loot", "system": "pf2e", "path": "pf.db"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return root
