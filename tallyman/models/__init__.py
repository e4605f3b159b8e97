"""
Tallyman Models.

Core models for the stock-movement ledger:
- StockBatch: Immutable record of one stock-in/stock-out event
- BatchLine: Product/quantity/unit entries of a batch
- UnitOfMeasure: Base and pack units used for conversion
"""

from tallyman.models.batch import BatchLine, StockBatch
from tallyman.models.enums import Direction, UnitKind
from tallyman.models.unit import UnitOfMeasure

__all__ = [
    'Direction',
    'UnitKind',
    'StockBatch',
    'BatchLine',
    'UnitOfMeasure',
]
