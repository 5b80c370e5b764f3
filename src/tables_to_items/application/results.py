"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CreatedItem:
    """Summary of one item created during a conversion."""

    id: str
    name: str
    table_entry_id: str


@dataclass
class ConversionResult:
    """Aggregated outcome of one conversion batch."""

    success: bool = True
    items_created: int = 0
    errors: list[str] = field(default_factory=list)
    created_items: list[CreatedItem] = field(default_factory=list)

    def record_created(self, item: CreatedItem) -> None:
        """Count a successfully created item."""
        self.created_items.append(item)
        self.items_created += 1

    def record_error(self, message: str) -> None:
        """Append a per-entry or batch-level failure."""
        self.errors.append(message)
        self.success = False

    @classmethod
    def failed(cls, message: str) -> ConversionResult:
        """Build a batch-fatal result carrying a single error."""
        result = cls()
        result.record_error(message)
        return result
