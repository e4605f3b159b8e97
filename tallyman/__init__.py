"""
Django Tallyman — Livro-razão de movimentação de estoque.

Records stock-in/stock-out batches and reconciles product quantities.

Uso:
    from tallyman import ledger, LedgerError

    result = ledger.submit_batch('out', [
        {'product_id': '12', 'name': 'Parafuso', 'unit': 'Caixa', 'quantity': 3},
    ], reference='OS-991')
    result.batch_id, result.matched, result.modified
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from tallyman.service import Ledger
        return Ledger
    elif name == 'LedgerError':
        from tallyman.exceptions import LedgerError
        return LedgerError
    elif name == 'StockBatch':
        from tallyman.models.batch import StockBatch
        return StockBatch
    elif name == 'BatchLine':
        from tallyman.models.batch import BatchLine
        return BatchLine
    elif name == 'UnitOfMeasure':
        from tallyman.models.unit import UnitOfMeasure
        return UnitOfMeasure
    elif name == 'Direction':
        from tallyman.models.enums import Direction
        return Direction
    elif name == 'UnitKind':
        from tallyman.models.enums import UnitKind
        return UnitKind
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'LedgerError',
    'StockBatch',
    'BatchLine',
    'UnitOfMeasure',
    'Direction',
    'UnitKind',
]

__version__ = '0.1.0'
