"""In-memory record store."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tables_to_items.errors import StoreError
from tables_to_items.infrastructure.documents import materialize
from tables_to_items.schemas import ItemPayload
from tables_to_items.types import Document


@dataclass
class InMemoryDestination:
    """Compendium held entirely in memory."""

    collection: str
    label: str = ""
    document_name: str = "Item"
    system: str | None = None
    locked: bool = False
    documents: list[Document] = field(default_factory=list)
    index: dict[str, str] = field(default_factory=dict)

    async def refresh_index(self) -> None:
        self.index = {str(doc["_id"]): str(doc["name"]) for doc in self.documents}


class InMemoryRecordStore:
    """Record store over a fixed set of in-memory destinations."""

    def __init__(self, destinations: Iterable[InMemoryDestination] = ()) -> None:
        self._destinations: dict[str, InMemoryDestination] = {}
        for destination in destinations:
            self.add(destination)

    def add(self, destination: InMemoryDestination) -> None:
        """Register destination by its collection id."""
        self._destinations[destination.collection] = destination

    def lookup(self, destination_id: str) -> InMemoryDestination | None:
        return self._destinations.get(destination_id)

    def destinations(self) -> list[InMemoryDestination]:
        return list(self._destinations.values())

    async def create(
        self, destination: InMemoryDestination, payload: ItemPayload
    ) -> Document:
        if destination.locked:
            raise StoreError(f"Compendium {destination.collection} is locked.")
        document, record = materialize(payload, destination.collection)
        destination.documents.append(document)
        return record
