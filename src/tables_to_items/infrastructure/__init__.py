"""Record store and table adapters."""

from .memory_store import InMemoryDestination, InMemoryRecordStore
from .pack_store import PackDestination, PackDirectoryStore
from .table_files import FileSourceTable, load_table

__all__ = [
    "FileSourceTable",
    "InMemoryDestination",
    "InMemoryRecordStore",
    "PackDestination",
    "PackDirectoryStore",
    "load_table",
]
