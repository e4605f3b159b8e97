"""
Ledger signals.

    batch_persisted(sender=StockBatch, batch)
        Sent after a batch and its lines are written, before reconciliation.

    batch_reconciled(sender=StockBatch, batch, result, deltas)
        Sent after deltas were applied (result is a ReconcileResult).
        Notification and low-stock collaborators subscribe here.
"""

from django.dispatch import Signal

batch_persisted = Signal()
batch_reconciled = Signal()
