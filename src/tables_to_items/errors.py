"""Exception hierarchy for table-to-item conversion."""

from __future__ import annotations


class TablesToItemsError(Exception):
    """Base exception for all conversion errors."""


class ConversionError(TablesToItemsError):
    """Raised when conversion input is invalid or cannot be read."""


class StoreError(TablesToItemsError):
    """Raised when a record store operation fails."""


class TableWriteError(StoreError):
    """Raised when a source table entry cannot be updated."""
