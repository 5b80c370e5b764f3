"""Helpers shared by stores that persist Foundry-style documents."""

from __future__ import annotations

import random
import string

from tables_to_items.schemas import ItemPayload
from tables_to_items.types import Document

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 16


def new_document_id(size: int = ID_LENGTH) -> str:
    """Return a random lowercase alphanumeric document id."""
    return "".join(random.choices(ID_ALPHABET, k=size))


def document_uuid(collection: str, document_id: str) -> str:
    return f"Compendium.{collection}.Item.{document_id}"


def materialize(payload: ItemPayload, collection: str) -> tuple[Document, Document]:
    """Assign an id to ``payload`` and return ``(stored document, created record)``."""
    document_id = new_document_id()
    document = {"_id": document_id, **payload.to_document()}
    record: Document = {
        "_id": document_id,
        "name": payload.name,
        "type": payload.type,
        "uuid": document_uuid(collection, document_id),
    }
    return document, record
