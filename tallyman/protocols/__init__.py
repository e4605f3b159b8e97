"""
Tallyman Protocols.

Value types and interfaces shared by the ledger services.
"""

from tallyman.protocols.ledger import (
    BatchDraft,
    LineItem,
    ReconcileResult,
    SubmitResult,
    UnitResolver,
)

__all__ = [
    "BatchDraft",
    "LineItem",
    "ReconcileResult",
    "SubmitResult",
    "UnitResolver",
]
