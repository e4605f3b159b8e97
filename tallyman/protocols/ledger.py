"""
Ledger value types — validated, immutable shapes passed between services.

Raw payloads are validated once (services.validation) and turned into
these types; nothing downstream touches dicts again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class LineItem:
    """One validated line of a batch."""

    product_id: str
    name: str
    quantity: int
    sku: str = ''
    unit: str = ''
    unit_price: Decimal | None = None
    batch_label: str = ''


@dataclass(frozen=True)
class BatchDraft:
    """A validated batch, not yet persisted."""

    direction: str
    items: tuple[LineItem, ...]
    batch_name: str = ''
    reference: str = ''
    note: str = ''


@dataclass(frozen=True)
class ReconcileResult:
    """Aggregate outcome of applying deltas to products."""

    matched: int = 0
    modified: int = 0
    failed: int = 0

    @property
    def complete(self) -> bool:
        """Every update ran without a database fault."""
        return self.failed == 0


@dataclass(frozen=True)
class SubmitResult:
    """What the submitting caller gets back."""

    batch_id: int
    matched: int
    modified: int
    upserts: int = 0
    deltas: dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            'batchId': str(self.batch_id),
            'matched': self.matched,
            'modified': self.modified,
            'upserts': self.upserts,
        }


@runtime_checkable
class UnitResolver(Protocol):
    """Anything that maps a unit name to its base-unit factor."""

    def __call__(self, unit_name: str | None) -> int:
        ...
