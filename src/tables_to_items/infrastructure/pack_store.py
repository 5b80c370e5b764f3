"""Record store over a directory of JSON-lines compendium packs.

The directory holds a ``packs.json`` manifest::

    {"packs": [{"name": "loot", "label": "Loot", "type": "Item",
                "system": "dnd5e", "path": "packs/loot.db", "locked": false}]}

Each pack file stores one JSON document per line.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from tables_to_items.errors import StoreError
from tables_to_items.infrastructure.documents import materialize
from tables_to_items.schemas import ItemPayload, PackManifest, PackMetadata
from tables_to_items.types import Document

logger = logging.getLogger(__name__)

MANIFEST_NAME = "packs.json"


def read_documents(path: Path) -> list[Document]:
    """Read all documents of a pack file; a missing file is an empty pack."""
    if not path.exists():
        return []
    documents: list[Document] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                documents.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise StoreError(
                    f"{path}:{line_no}: invalid JSON document: {exc}"
                ) from exc
    return documents


def append_document(path: Path, document: Document) -> None:
    """Append one document line to a pack file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    needs_newline = path.exists() and not _ends_with_newline(path)
    with path.open("a", encoding="utf-8") as handle:
        if needs_newline:
            handle.write("\n")
        handle.write(json.dumps(document, ensure_ascii=True))
        handle.write("\n")


def _ends_with_newline(path: Path) -> bool:
    with path.open("rb") as handle:
        if handle.seek(0, os.SEEK_END) == 0:
            return True
        handle.seek(-1, os.SEEK_END)
        return handle.read(1) == b"\n"


@dataclass
class PackDestination:
    """One pack file exposed as a destination."""

    metadata: PackMetadata
    path: Path
    index: dict[str, str] = field(default_factory=dict)

    @property
    def collection(self) -> str:
        return self.metadata.name

    @property
    def label(self) -> str:
        return self.metadata.label or self.metadata.name

    @property
    def document_name(self) -> str:
        return self.metadata.type

    @property
    def system(self) -> str | None:
        return self.metadata.system

    @property
    def locked(self) -> bool:
        return self.metadata.locked

    async def refresh_index(self) -> None:
        self.index = {
            str(doc.get("_id", "")): str(doc.get("name", ""))
            for doc in read_documents(self.path)
        }
        logger.debug("indexed %d documents in %s", len(self.index), self.path)


class PackDirectoryStore:
    """Record store backed by a pack directory and its manifest."""

    def __init__(self, root: Path, manifest_name: str = MANIFEST_NAME) -> None:
        self.root = root
        manifest = _load_manifest(root / manifest_name)
        self._destinations = {
            pack.name: PackDestination(metadata=pack, path=self._resolve(pack.path))
            for pack in manifest.packs
        }

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path

    def lookup(self, destination_id: str) -> PackDestination | None:
        return self._destinations.get(destination_id)

    def destinations(self) -> list[PackDestination]:
        return list(self._destinations.values())

    async def create(self, destination: PackDestination, payload: ItemPayload) -> Document:
        """Append ``payload`` to the destination pack and return the created record.

        Raises
        ------
        StoreError
            If the pack is locked or cannot be written.
        """
        if destination.locked:
            raise StoreError(f"Compendium {destination.collection} is locked.")
        document, record = materialize(payload, destination.collection)
        try:
            append_document(destination.path, document)
        except OSError as exc:
            raise StoreError(f"Unable to write {destination.path}: {exc}") from exc
        return record


def _load_manifest(path: Path) -> PackManifest:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StoreError(f"Unable to read pack manifest {path}: {exc}") from exc
    try:
        return PackManifest.model_validate(raw)
    except ValidationError as exc:
        raise StoreError(f"Invalid pack manifest {path}: {exc}") from exc
