"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol

from tables_to_items.types import FieldMap

if TYPE_CHECKING:
    from tables_to_items.schemas import ItemPayload, SourceEntry


class Destination(Protocol):
    """Compendium that receives created items."""

    collection: str
    label: str
    document_name: str
    system: str | None

    @property
    def locked(self) -> bool:
        """Whether the destination refuses writes."""

    async def refresh_index(self) -> None:
        """Rebuild the destination index after writes."""


class RecordStore(Protocol):
    """Resolve destinations and create records inside them."""

    def lookup(self, destination_id: str) -> Destination | None:
        """Return destination by identifier, or ``None`` if unknown."""

    def destinations(self) -> Iterable[Destination]:
        """Return all known destinations in store order."""

    async def create(self, destination: Destination, payload: ItemPayload) -> object:
        """Create one record and return the store's view of it."""


class SourceTablePort(Protocol):
    """Roll table consumed by the conversion engine."""

    id: str
    name: str | None

    @property
    def results(self) -> Sequence[SourceEntry]:
        """Entries in table order."""

    async def update_entry(self, entry_id: str, fields: FieldMap) -> None:
        """Update one entry in place."""


class Localizer(Protocol):
    """Translate message keys into user-facing text."""

    def localize(self, key: str) -> str:
        """Return the message for ``key``."""

    def format(self, key: str, **data: object) -> str:
        """Return the message for ``key`` with ``data`` substituted."""


class Notifier(Protocol):
    """Surface messages to the user."""

    def info(self, message: str) -> None:
        """Show an informational message."""

    def warn(self, message: str) -> None:
        """Show a warning."""

    def error(self, message: str) -> None:
        """Show an error."""
