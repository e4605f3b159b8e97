"""
Ledger services — one module per step of a batch submission.

    validate_batch -> LedgerWriter.persist -> UnitCatalog.load
        -> aggregate -> Reconciler.apply

Re-exports:
    from tallyman.services import (
        UnitCatalog, validate_batch, aggregate, LedgerWriter, Reconciler,
    )
"""

from tallyman.services.aggregation import aggregate
from tallyman.services.ledger import BatchQueries, LedgerWriter
from tallyman.services.reconciliation import Reconciler
from tallyman.services.units import UnitCatalog
from tallyman.services.validation import validate_batch, validate_items

__all__ = [
    'UnitCatalog',
    'validate_batch',
    'validate_items',
    'aggregate',
    'LedgerWriter',
    'BatchQueries',
    'Reconciler',
]
