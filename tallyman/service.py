"""
Ledger Service — The single public interface for stock batches.

Usage:
    from tallyman import ledger, LedgerError

    result = ledger.submit({
        'direction': 'out',
        'reference': 'OS-991',
        'items': [{'productId': '12', 'name': 'Parafuso', 'unit': 'Caixa', 'quantity': 3}],
    })
    result.as_dict()  # {'batchId': '1', 'matched': 1, 'modified': 1, 'upserts': 0}
"""

import logging

from django.db import transaction

from tallyman.exceptions import LedgerError
from tallyman.models.batch import StockBatch
from tallyman.protocols.ledger import BatchDraft, SubmitResult
from tallyman.services.aggregation import aggregate
from tallyman.services.ledger import BatchQueries, LedgerWriter
from tallyman.services.products import low_stock
from tallyman.services.reconciliation import Reconciler
from tallyman.services.units import UnitCatalog
from tallyman.services.validation import validate_batch
from tallyman.signals import batch_reconciled

logger = logging.getLogger('tallyman')


class Ledger(BatchQueries):
    """
    Single interface for batch submission and history.

    A submission is two writes without a spanning transaction:

        Submitted -> Validated -> Persisted -> Reconciled

    If the ledger write fails, nothing happened. If reconciliation fails
    after it, the batch stays on record with reconciled=False.
    """

    # ══════════════════════════════════════════════════════════════
    # SUBMISSION
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def submit(cls, payload: dict, using: str | None = None,
               product_model=None) -> SubmitResult:
        """
        Validate a raw payload and submit it.

        Raises:
            LedgerError('INVALID_PAYLOAD'): With field -> messages in e.issues.
                Nothing is written.
        """
        result = validate_batch(payload)
        if not result.is_valid:
            raise LedgerError('INVALID_PAYLOAD', issues=result.issues)
        return cls.submit_draft(result.batch, using=using, product_model=product_model)

    @classmethod
    def submit_batch(cls, direction: str, items: list, batch_name: str | None = None,
                     reference: str | None = None, note: str | None = None,
                     using: str | None = None, product_model=None) -> SubmitResult:
        """Submit a batch from its parts (items are raw dicts)."""
        payload = {
            'direction': direction,
            'items': items,
            'batch_name': batch_name or '',
            'reference': reference or '',
            'note': note or '',
        }
        return cls.submit(payload, using=using, product_model=product_model)

    @classmethod
    def submit_draft(cls, draft: BatchDraft, using: str | None = None,
                     product_model=None) -> SubmitResult:
        """
        Persist an already validated batch, then reconcile it.

        Reconciler is built first so a misconfigured product model fails
        before anything is written.
        """
        reconciler = Reconciler(product_model=product_model, using=using)

        batch = LedgerWriter(using=using).persist(draft)

        catalog = UnitCatalog.load(using=using)
        deltas = aggregate(draft.items, draft.direction, catalog)
        outcome = reconciler.apply(deltas)

        if outcome.complete:
            reconciler.mark_reconciled(batch)
        else:
            logger.warning(
                "ledger.batch.unreconciled",
                extra={"batch_id": batch.pk, "failed": outcome.failed},
            )

        # The quantities are already applied; nothing below may fail the submission
        responses = batch_reconciled.send_robust(
            sender=StockBatch, batch=batch, result=outcome, deltas=deltas,
        )
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "ledger.signal.receiver_failed",
                    exc_info=response,
                    extra={"batch_id": batch.pk, "receiver": getattr(receiver, '__qualname__', repr(receiver))},
                )
        try:
            cls._warn_low_stock(deltas, reconciler)
        except Exception:
            logger.exception("ledger.stock.low_check_failed", extra={"batch_id": batch.pk})

        return SubmitResult(
            batch_id=batch.pk,
            matched=outcome.matched,
            modified=outcome.modified,
            deltas=deltas,
        )

    @classmethod
    def _warn_low_stock(cls, deltas: dict[str, int], reconciler: Reconciler) -> None:
        """Log products a stock-out pushed to or below their threshold."""
        lowered = [pid for pid, delta in deltas.items() if delta < 0]
        if not lowered:
            return
        with transaction.atomic(using=reconciler.using):
            products = list(low_stock(lowered, model=reconciler.product_model, using=reconciler.using))
        for product in products:
            logger.warning(
                "ledger.stock.low",
                extra={
                    "product_id": product.pk,
                    "quantity": str(getattr(product, reconciler.quantity_field)),
                },
            )
